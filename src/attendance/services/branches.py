"""Per-user branch configuration."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..models.domain import BranchLocation, Coordinate, UserLocationConfig
from ..persistence.store import AttendanceStore, new_id
from .errors import InvalidRequest
from .locations.short_links import ShortLinkResolver, resolve_location_input
from .users import get_user

logger = logging.getLogger(__name__)


def build_branch(
    name: str,
    *,
    address: str = "",
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    location: Optional[str] = None,
    branch_id: Optional[str] = None,
    resolver: ShortLinkResolver | None = None,
) -> BranchLocation:
    """Create a branch from explicit coordinates or from a pasted location/map link."""
    if not name or not name.strip():
        raise InvalidRequest("Branch name is required.")

    if latitude is not None and longitude is not None:
        coordinate = Coordinate.from_values(latitude, longitude)
        if coordinate is None:
            raise InvalidRequest("Branch coordinates must be finite numbers.")
    elif location:
        coordinate = resolve_location_input(location, resolver)
    else:
        raise InvalidRequest("Provide either latitude/longitude or a location link.")

    return BranchLocation(
        id=branch_id or new_id(),
        name=name.strip(),
        address=address.strip(),
        latitude=coordinate.latitude,
        longitude=coordinate.longitude,
    )


def get_branches(store: AttendanceStore, user_id: str) -> UserLocationConfig:
    return store.get_location_config(user_id)


def replace_branches(
    store: AttendanceStore,
    user_id: str,
    branches: Sequence[BranchLocation],
) -> UserLocationConfig:
    """Save the full branch list; branches left out are removed."""
    get_user(store, user_id)
    ids = [branch.id for branch in branches]
    if len(ids) != len(set(ids)):
        raise InvalidRequest("Branch ids must be unique.")
    config = store.save_location_config(UserLocationConfig(user_id=user_id, branches=list(branches)))
    logger.info(f"Saved {len(config.branches)} branches for user {user_id}")
    return config
