"""Attendance service helpers."""

from .location import LocationAttendanceResult, location_options, record_location_attendance
from .position import PositionFix, PositionRequest, PositionSource, ReportedPositionSource
from .records import (
    add_record,
    correct_record_type,
    current_period_label,
    delete_record,
    history,
    history_for_period,
    my_logs,
    today_records,
)

__all__ = [
    "LocationAttendanceResult",
    "location_options",
    "record_location_attendance",
    "PositionFix",
    "PositionRequest",
    "PositionSource",
    "ReportedPositionSource",
    "add_record",
    "correct_record_type",
    "current_period_label",
    "delete_record",
    "history",
    "history_for_period",
    "my_logs",
    "today_records",
]
