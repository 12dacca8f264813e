"""Server discovery through the locate service.

The locate service answers with a list of nearby servers, best first. Each
result maps URL templates such as ``wss:///throughput/v1/download`` to
fully-qualified URLs that already embed an access token.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..errors import ConfigError, DiscoveryError
from ..state import EndpointPair
from ..config.protocol import DOWNLOAD_PATH, UPLOAD_PATH
from ..config.locate import LOCATE_BASE_URL, LOCATE_RESOURCE_PATH, LOCATE_TIMEOUT_S

logger = logging.getLogger(__name__)


def parse_locate_response(js: Any, scheme: str) -> list[EndpointPair]:
    """Extract usable URL pairs from a decoded locate response, in order.

    Results lacking either URL for ``scheme`` are skipped.

    Raises:
        DiscoveryError: The payload has no ``results`` list or no result
            carries a usable pair.
    """
    if not isinstance(js, dict) or not isinstance(js.get("results"), list):
        raise DiscoveryError(f"could not understand locate response: {str(js)[:200]}")

    download_key = f"{scheme}://{DOWNLOAD_PATH}"
    upload_key = f"{scheme}://{UPLOAD_PATH}"
    pairs: list[EndpointPair] = []
    for result in js["results"]:
        urls = result.get("urls") if isinstance(result, dict) else None
        if not isinstance(urls, dict):
            continue
        download_url = urls.get(download_key)
        upload_url = urls.get(upload_key)
        if not isinstance(download_url, str) or not isinstance(upload_url, str):
            continue
        try:
            pairs.append(EndpointPair(download_url=download_url, upload_url=upload_url))
        except ConfigError as exc:
            logger.debug("Skipping locate result with unusable URLs: %s", exc.message)

    if not pairs:
        raise DiscoveryError(f"locate returned no usable {scheme} servers")
    return pairs


class LocateClient:
    """Async HTTP client for the locate service."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_s: float = LOCATE_TIMEOUT_S,
    ) -> None:
        self.url = base_url or LOCATE_BASE_URL.rstrip("/") + "/" + LOCATE_RESOURCE_PATH
        self.timeout_s = timeout_s

    async def discover(self, params: list[tuple[str, str]], scheme: str) -> list[EndpointPair]:
        """Query the locate service and return server URL pairs, best first.

        Raises:
            DiscoveryError: On HTTP failure, an undecodable body, or no
                usable result.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout_s)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.url, params=params) as response:
                    if response.status != 200:
                        raise DiscoveryError(f"locate request failed with HTTP {response.status}")
                    js = await response.json(content_type=None)
        except DiscoveryError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise DiscoveryError(f"locate request to {self.url} failed: {exc}") from exc

        pairs = parse_locate_response(js, scheme)
        logger.info("Locate returned %d server(s); first: %s", len(pairs), pairs[0].download_url.split("?")[0])
        return pairs


__all__ = ["LocateClient", "parse_locate_response"]
