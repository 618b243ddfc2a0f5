"""Attendance request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import AttendanceRecord, RecordType
from .users import BranchModel


class RecordModel(BaseModel):
    id: str
    user_id: str
    user_name: str
    date: datetime
    day_name: str
    type: RecordType
    is_private: bool = False
    branch_name: Optional[str] = None
    location_link: Optional[str] = None
    accuracy: Optional[float] = None

    @classmethod
    def from_domain(cls, record: AttendanceRecord) -> "RecordModel":
        return cls.model_validate(record, from_attributes=True)


class RecordCreateRequest(BaseModel):
    type: RecordType
    is_private: bool = False
    date: Optional[datetime] = Field(default=None, description="Only for private log entries.")


class RecordUpdateRequest(BaseModel):
    type: RecordType


class RecordGroupModel(BaseModel):
    period: str
    records: List[RecordModel]


class TodayResponse(BaseModel):
    period: str
    records: List[RecordModel]


class PositionModel(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    accuracy: Optional[float] = Field(default=None, ge=0)
    error_code: Optional[int] = Field(
        default=None,
        description="Browser geolocation error code (1 permission denied, 2 unavailable, 3 timeout).",
    )


class LocationAttendanceRequest(BaseModel):
    branch_id: str
    type: RecordType
    position: PositionModel


class LocationAttendanceResponse(BaseModel):
    record: RecordModel
    distance_meters: float


class PositionRequestModel(BaseModel):
    high_accuracy: bool
    timeout_seconds: float
    maximum_age_seconds: float


class LocationOptionsResponse(BaseModel):
    branches: List[BranchModel]
    max_meters: float
    position_request: PositionRequestModel
