"""Geofenced check-in and check-out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...config import settings
from ...models.domain import AttendanceRecord, BranchLocation, RecordType, User
from ...persistence.store import AttendanceStore
from ..errors import BranchNotFound, InvalidRequest, OutOfGeofence
from ..geospatial import format_distance, verify_within_geofence
from ..locations.parser import build_map_link
from ..users import require_capability
from .position import PositionRequest, PositionSource
from .records import LOCATION_TYPES, as_utc, new_record, utcnow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocationAttendanceResult:
    record: AttendanceRecord
    distance_meters: float


@dataclass(slots=True)
class LocationOptions:
    branches: list[BranchLocation]
    max_meters: float
    position_request: PositionRequest


def location_options(store: AttendanceStore, user: User) -> LocationOptions:
    require_capability(user, "location_attendance")
    return LocationOptions(
        branches=store.get_location_config(user.id).branches,
        max_meters=settings.geofence_max_meters,
        position_request=PositionRequest.from_settings(),
    )


def record_location_attendance(
    store: AttendanceStore,
    user: User,
    branch_id: str,
    record_type: RecordType,
    source: PositionSource,
    *,
    max_meters: Optional[float] = None,
    now: Optional[datetime] = None,
) -> LocationAttendanceResult:
    """Verify the user's position against a branch and record the check-in/out.

    Nothing is written unless the position is obtained and within range.
    """
    if record_type not in LOCATION_TYPES:
        raise InvalidRequest("Only location attendance or departure can be recorded here.")
    require_capability(user, "location_attendance")

    # Snapshot of the branch list for this attempt.
    branch = store.get_location_config(user.id).find_branch(branch_id)
    if branch is None:
        raise BranchNotFound(branch_id)

    limit = max_meters if max_meters is not None else settings.geofence_max_meters
    fix = source.current_position(PositionRequest.from_settings())
    check = verify_within_geofence(fix.coordinate, branch.coordinate, limit)
    if not check.within_range:
        logger.warning(
            f"User {user.id} is {format_distance(check.distance_meters)} from branch {branch.id}, "
            f"outside the {format_distance(limit)} limit"
        )
        raise OutOfGeofence(check.distance_meters, limit)

    record = new_record(
        user,
        record_type,
        as_utc(now or utcnow()),
        branch_name=branch.name,
        location_link=build_map_link(fix.coordinate),
        accuracy=fix.accuracy,
    )
    record = store.append_record(record)
    logger.info(f"Recorded {record_type.name} for user {user.id} at branch {branch.id} ({check.distance_meters:.0f} m)")
    return LocationAttendanceResult(record=record, distance_meters=check.distance_meters)
