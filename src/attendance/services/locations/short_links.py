"""Resolution of shortened map links and location input."""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from urllib.parse import urlparse

import httpx

from ...config import settings
from ...models.domain import Coordinate
from ..errors import CoordinateParseFailure, ShortLinkResolutionFailure
from .parser import parse_coordinates

logger = logging.getLogger(__name__)


class ShortLinkResolver:
    """Expands shortened map links, directly or through a redirect-resolving proxy."""

    def __init__(
        self,
        hosts: Sequence[str] | None = None,
        proxy_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.hosts = tuple(host.lower() for host in (hosts if hosts is not None else settings.short_link_hosts))
        self.proxy_url = proxy_url if proxy_url is not None else settings.short_link_proxy_url
        self.timeout = timeout if timeout is not None else settings.short_link_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    def is_short_link(self, url: str) -> bool:
        try:
            host = (urlparse(url.strip()).hostname or "").lower()
        except ValueError:
            return False
        return any(host == known or host.endswith(f".{known}") for known in self.hosts)

    def resolve(self, url: str) -> Optional[str]:
        """Return the expanded URL, or the response body when no URL carries coordinates.

        Returns None for links outside the known hosts and on any network failure.
        """
        if not self.is_short_link(url):
            return None

        client = self._get_client()
        try:
            if self.proxy_url:
                response = client.get(self.proxy_url, params={"url": url.strip()})
            else:
                response = client.get(url.strip())
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning(f"Failed to resolve short link {url}: {exc}")
            return None
        finally:
            client.close()

        final_url = str(response.url)
        if parse_coordinates(final_url) is not None:
            return final_url
        body = response.text
        if body:
            logger.debug(f"Short link {url} resolved to {final_url} without coordinates, falling back to body")
            return body
        return None


def resolve_location_input(text: str, resolver: ShortLinkResolver | None = None) -> Coordinate:
    """Turn user input (raw pair, map link or short link) into a coordinate."""

    value = (text or "").strip()
    resolver = resolver or ShortLinkResolver()

    if resolver.is_short_link(value):
        expanded = resolver.resolve(value)
        if expanded is None:
            raise ShortLinkResolutionFailure(value)
        coordinate = parse_coordinates(expanded)
    else:
        coordinate = parse_coordinates(value)

    if coordinate is None:
        raise CoordinateParseFailure(value)
    return coordinate
