"""Location input endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...models.domain import User
from ...schemas.locations import CoordinateModel, ResolveLocationRequest
from ...services.errors import AttendanceError
from ...services.locations import ShortLinkResolver, build_map_link, resolve_location_input
from ..deps import current_user, get_resolver, http_error

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("/resolve", response_model=CoordinateModel, status_code=status.HTTP_200_OK)
def resolve_location(
    payload: ResolveLocationRequest,
    _: User = Depends(current_user),
    resolver: ShortLinkResolver = Depends(get_resolver),
) -> CoordinateModel:
    """Extract coordinates from a raw pair, a map link or a shortened map link."""
    try:
        coordinate = resolve_location_input(payload.input, resolver)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return CoordinateModel(
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
        map_link=build_map_link(coordinate),
    )
