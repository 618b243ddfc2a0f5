"""Coordinate extraction from free-form location input."""

from __future__ import annotations

import re
from typing import Optional

from ...models.domain import Coordinate

# URL patterns only accept decimal numbers; bare integers are left to the raw pair check.
_AT_MARKER = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")
_QUERY_PARAM = re.compile(r"[?&](?:q|ll)=(-?\d+\.\d+),(-?\d+\.\d+)")
_SEARCH_PATH = re.compile(r"/search/(-?\d+\.\d+),\+?(-?\d+\.\d+)")

_URL_PATTERNS = (_AT_MARKER, _QUERY_PARAM, _SEARCH_PATH)

MAP_LINK_TEMPLATE = "https://www.google.com/maps?q={latitude},{longitude}"


def _parse_raw_pair(text: str) -> Optional[Coordinate]:
    parts = text.split(",")
    if len(parts) != 2:
        return None
    return Coordinate.from_values(parts[0].strip(), parts[1].strip())


def parse_coordinates(text: str) -> Optional[Coordinate]:
    """Extract a coordinate from a "lat,lng" string or a map link.

    Tried in order: raw pair, ``@lat,lng`` marker, ``q=``/``ll=`` query
    parameter, ``/search/lat,lng`` path. Returns None when nothing matches.
    """
    if not text:
        return None

    coordinate = _parse_raw_pair(text)
    if coordinate is not None:
        return coordinate

    for pattern in _URL_PATTERNS:
        match = pattern.search(text)
        if match:
            coordinate = Coordinate.from_values(match.group(1), match.group(2))
            if coordinate is not None:
                return coordinate
    return None


def build_map_link(coordinate: Coordinate) -> str:
    return MAP_LINK_TEMPLATE.format(latitude=coordinate.latitude, longitude=coordinate.longitude)
