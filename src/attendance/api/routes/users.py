"""User administration and branch configuration endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...models.domain import User
from ...persistence import AttendanceStore, get_store
from ...schemas.users import (
    BranchModel,
    UserCreateRequest,
    UserLocationsRequest,
    UserLocationsResponse,
    UserModel,
    UserUpdateRequest,
)
from ...services import branches as branch_service
from ...services import users as user_service
from ...services.errors import AttendanceError
from ...services.locations import ShortLinkResolver
from ..deps import admin_user, current_user, get_resolver, http_error

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserModel)
def get_me(user: User = Depends(current_user)) -> UserModel:
    return UserModel.from_domain(user)


@router.get("", response_model=List[UserModel])
def list_users(
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> List[UserModel]:
    return [UserModel.from_domain(user) for user in user_service.ensure_default_users(store)]


@router.post("", response_model=UserModel, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> UserModel:
    try:
        user = user_service.create_user(
            store,
            payload.username,
            payload.password,
            payload.permissions.to_domain() if payload.permissions else None,
        )
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return UserModel.from_domain(user)


@router.patch("/{user_id}", response_model=UserModel)
def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> UserModel:
    try:
        user = user_service.update_user(
            store,
            user_id,
            password=payload.password,
            permissions=payload.permissions.to_domain() if payload.permissions else None,
        )
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return UserModel.from_domain(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> Response:
    try:
        user_service.delete_user(store, user_id)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/locations", response_model=UserLocationsResponse)
def get_user_locations(
    user_id: str,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> UserLocationsResponse:
    config = branch_service.get_branches(store, user_id)
    return UserLocationsResponse(
        user_id=config.user_id,
        branches=[BranchModel.from_domain(branch) for branch in config.branches],
    )


@router.put("/{user_id}/locations", response_model=UserLocationsResponse)
def replace_user_locations(
    user_id: str,
    payload: UserLocationsRequest,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
    resolver: ShortLinkResolver = Depends(get_resolver),
) -> UserLocationsResponse:
    """Replace the user's whole branch list; branches left out are removed."""
    try:
        branches = [
            branch_service.build_branch(
                item.name,
                address=item.address,
                latitude=item.latitude,
                longitude=item.longitude,
                location=item.location,
                branch_id=item.id,
                resolver=resolver,
            )
            for item in payload.branches
        ]
        config = branch_service.replace_branches(store, user_id, branches)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return UserLocationsResponse(
        user_id=config.user_id,
        branches=[BranchModel.from_domain(branch) for branch in config.branches],
    )
