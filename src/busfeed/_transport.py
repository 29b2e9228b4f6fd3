"""HTTP transport for the NextBus XML feed."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from busfeed._constants import USER_AGENT
from busfeed.config import FeedConfig
from busfeed.exceptions import BusFeedTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, url: str) -> str:
        ...


class HttpTransport:
    """aiohttp transport returning response bodies as text.

    Every request bypasses caches and carries ``config.request_timeout``.
    """

    def __init__(self, config: FeedConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, url: str) -> str:
        headers: dict[str, str] = {
            "cache-control": "no-cache",
            "pragma": "no-cache",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise BusFeedTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except BusFeedTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise BusFeedTransportError(
                f"Request to {url} timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise BusFeedTransportError(
                f"Request to {url} failed: {exc}",
                url=url,
            ) from exc
        except (UnicodeDecodeError, LookupError) as exc:
            # LookupError: unknown charset in the Content-Type header.
            raise BusFeedTransportError(
                f"Undecodable response body from {url}: {exc}",
                url=url,
            ) from exc

        return text
