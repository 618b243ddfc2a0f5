"""Domain models for users, branches, attendance records and vacations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


class RecordType(str, Enum):
    """Kinds of attendance entries. Values are the labels stored in the database."""

    ATTENDANCE = "حضور"
    VACATION = "إجازة سنوية"
    MISSION = "مأمورية"
    LOC_ATTENDANCE = "حضور لوكيشن"
    LOC_DEPARTURE = "انصراف لوكيشن"


class VacationStatus(str, Enum):
    PENDING = "قيد الانتظار"
    APPROVED = "مقبولة"
    REJECTED = "مرفوضة"


@dataclass(slots=True, frozen=True)
class Coordinate:
    """Signed latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    @classmethod
    def from_values(cls, latitude: Any, longitude: Any) -> Optional["Coordinate"]:
        """Build a coordinate, or return None unless both values are finite numbers."""
        try:
            lat, lng = float(latitude), float(longitude)
        except (TypeError, ValueError):
            return None
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return None
        return cls(lat, lng)


@dataclass(slots=True)
class Permissions:
    """Capability flags granted to a user."""

    mark_attendance: bool = True
    location_attendance: bool = True
    request_vacation: bool = True
    view_history: bool = True
    view_my_logs: bool = True
    manage_vacations: bool = False

    @classmethod
    def baseline(cls) -> "Permissions":
        """Capabilities of accounts created before permissions existed."""
        return cls()

    @classmethod
    def full(cls) -> "Permissions":
        return cls(**{flag.name: True for flag in fields(cls)})

    @classmethod
    def from_record(cls, raw: Optional[dict]) -> "Permissions":
        """Read a stored permissions object. A missing object means the baseline."""
        if not raw:
            return cls.baseline()
        defaults = cls.baseline()
        return cls(**{flag.name: bool(raw.get(flag.name, getattr(defaults, flag.name))) for flag in fields(cls)})

    def to_record(self) -> dict[str, bool]:
        return {flag.name: getattr(self, flag.name) for flag in fields(self)}


@dataclass(slots=True)
class User:
    id: str
    username: str
    password: str
    is_admin: bool = False
    permissions: Optional[Permissions] = None

    def effective_permissions(self) -> Permissions:
        if self.is_admin:
            return Permissions.full()
        return self.permissions or Permissions.baseline()


@dataclass(slots=True)
class BranchLocation:
    id: str
    name: str
    address: str
    latitude: float
    longitude: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(slots=True)
class UserLocationConfig:
    """Ordered branch list configured for one user."""

    user_id: str
    branches: list[BranchLocation] = field(default_factory=list)

    def find_branch(self, branch_id: str) -> Optional[BranchLocation]:
        for branch in self.branches:
            if branch.id == branch_id:
                return branch
        return None


@dataclass(slots=True)
class AttendanceRecord:
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


@dataclass(slots=True)
class VacationRequest:
    id: str
    user_id: str
    user_name: str
    start_date: date
    end_date: date
    return_date: date
    days_count: int
    status: VacationStatus
    created_at: datetime
