"""User, sign-in and branch configuration schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import BranchLocation, Permissions, User


class LoginRequest(BaseModel):
    username: str
    password: str


class PermissionsModel(BaseModel):
    mark_attendance: bool = True
    location_attendance: bool = True
    request_vacation: bool = True
    view_history: bool = True
    view_my_logs: bool = True
    manage_vacations: bool = False

    def to_domain(self) -> Permissions:
        return Permissions(**self.model_dump())


class UserModel(BaseModel):
    id: str
    username: str
    is_admin: bool
    permissions: PermissionsModel

    @classmethod
    def from_domain(cls, user: User) -> "UserModel":
        return cls(
            id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            permissions=PermissionsModel(**user.effective_permissions().to_record()),
        )


class UserCreateRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    permissions: Optional[PermissionsModel] = None


class UserUpdateRequest(BaseModel):
    password: Optional[str] = Field(default=None, min_length=1)
    permissions: Optional[PermissionsModel] = None


class BranchModel(BaseModel):
    id: str
    name: str
    address: str
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, branch: BranchLocation) -> "BranchModel":
        return cls.model_validate(branch, from_attributes=True)


class BranchInput(BaseModel):
    id: Optional[str] = None
    name: str
    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location: Optional[str] = Field(
        default=None,
        description="Raw 'lat,lng' or a map link (short links are resolved). Used when latitude/longitude are absent.",
    )


class UserLocationsRequest(BaseModel):
    branches: List[BranchInput]


class UserLocationsResponse(BaseModel):
    user_id: str
    branches: List[BranchModel]
