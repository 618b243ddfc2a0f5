"""Location input helpers."""

from .parser import build_map_link, parse_coordinates
from .short_links import ShortLinkResolver, resolve_location_input

__all__ = [
    "parse_coordinates",
    "build_map_link",
    "ShortLinkResolver",
    "resolve_location_input",
]
