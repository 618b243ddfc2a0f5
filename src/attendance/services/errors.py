"""Domain errors surfaced to API callers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class AttendanceError(Exception):
    """Base class for recoverable, user-facing failures."""

    code = "attendance_error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class InvalidRequest(AttendanceError):
    code = "invalid_request"
    status_code = 400


class InvalidCredentials(AttendanceError):
    code = "invalid_credentials"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class CapabilityDenied(AttendanceError):
    code = "capability_denied"
    status_code = 403

    def __init__(self, capability: str) -> None:
        super().__init__(f"You are not allowed to use '{capability}'.")
        self.capability = capability


class NotFound(AttendanceError):
    code = "not_found"
    status_code = 404


class BranchNotFound(NotFound):
    code = "branch_not_found"

    def __init__(self, branch_id: str) -> None:
        super().__init__(f"Branch '{branch_id}' is not registered for this user. Contact your manager.")
        self.branch_id = branch_id


class AlreadyRecorded(AttendanceError):
    code = "already_recorded"
    status_code = 409


class CoordinateParseFailure(AttendanceError):
    code = "coordinate_parse_failure"
    status_code = 422

    def __init__(self, value: str) -> None:
        super().__init__("Could not determine coordinates from the given location.")
        self.value = value


class ShortLinkResolutionFailure(AttendanceError):
    code = "short_link_resolution_failure"
    status_code = 422

    def __init__(self, url: str) -> None:
        super().__init__("Could not open the shortened map link. Paste the raw coordinates (lat,lng) instead.")
        self.url = url


class PositionErrorReason(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int | None) -> "PositionErrorReason":
        """Map a browser geolocation error code to a reason."""
        return {
            1: cls.PERMISSION_DENIED,
            2: cls.POSITION_UNAVAILABLE,
            3: cls.TIMEOUT,
        }.get(code, cls.UNKNOWN)


_POSITION_MESSAGES = {
    PositionErrorReason.PERMISSION_DENIED: "Allow location access for this site in your browser or device settings.",
    PositionErrorReason.POSITION_UNAVAILABLE: "Your current position could not be determined. Try again in an open area.",
    PositionErrorReason.TIMEOUT: "The location request timed out. Try again in an open area.",
    PositionErrorReason.UNKNOWN: "Unknown error while getting your location.",
}


class PositionUnavailable(AttendanceError):
    code = "position_unavailable"
    status_code = 422

    def __init__(self, reason: PositionErrorReason) -> None:
        super().__init__(_POSITION_MESSAGES[reason])
        self.reason = reason

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "reason": self.reason.value}


class OutOfGeofence(AttendanceError):
    """The reported position is farther from the branch than allowed."""

    code = "out_of_geofence"
    status_code = 403

    def __init__(self, distance_meters: float, max_meters: float) -> None:
        super().__init__(
            f"You are outside the allowed zone. Current distance from the branch: "
            f"{distance_meters / 1000:.2f} km (limit {max_meters / 1000:g} km)."
        )
        self.distance_meters = distance_meters
        self.max_meters = max_meters

    def to_detail(self) -> dict[str, Any]:
        return {
            **super().to_detail(),
            "distance_meters": self.distance_meters,
            "max_meters": self.max_meters,
        }
