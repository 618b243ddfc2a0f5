"""Device position acquisition contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ...config import settings
from ...models.domain import Coordinate
from ..errors import PositionErrorReason, PositionUnavailable


@dataclass(slots=True, frozen=True)
class PositionRequest:
    """Options a position source must honour for attendance checks."""

    high_accuracy: bool = True
    timeout_seconds: float = 15.0
    maximum_age_seconds: float = 0.0

    @classmethod
    def from_settings(cls) -> "PositionRequest":
        return cls(timeout_seconds=settings.position_timeout_seconds)


@dataclass(slots=True, frozen=True)
class PositionFix:
    coordinate: Coordinate
    accuracy: Optional[float] = None


class PositionSource(Protocol):
    def current_position(self, request: PositionRequest) -> PositionFix:
        """Return a fresh fix or raise PositionUnavailable."""
        ...


class ReportedPositionSource:
    """Position reported by the browser client, either a fix or a geolocation error code."""

    def __init__(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        accuracy: Optional[float] = None,
        error_code: Optional[int] = None,
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy = accuracy
        self.error_code = error_code

    def current_position(self, request: PositionRequest) -> PositionFix:
        if self.error_code is not None:
            raise PositionUnavailable(PositionErrorReason.from_code(self.error_code))
        coordinate = Coordinate.from_values(self.latitude, self.longitude)
        if coordinate is None:
            raise PositionUnavailable(PositionErrorReason.POSITION_UNAVAILABLE)
        return PositionFix(coordinate=coordinate, accuracy=self.accuracy)
