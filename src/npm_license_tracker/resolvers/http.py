"""Shared HTTP plumbing for registry resolvers."""

from typing import Optional

import aiohttp

from npm_license_tracker import __version__
from npm_license_tracker.resolvers.base import BaseResolver

USER_AGENT = f"npm-license-tracker/{__version__}"
DEFAULT_TIMEOUT = 30.0
DNS_CACHE_TTL = 300


class HttpResolver(BaseResolver):
    """Base class for resolvers that talk to a registry over HTTP.

    Every request goes through one lazily created aiohttp.ClientSession that
    carries the identifying User-Agent and a total per-request timeout. The
    timeout is the only deadline a lookup has; callers add none of their own.

    Attributes:
        timeout: Total per-request timeout in seconds.
        user_agent: Value of the User-Agent header sent with every request.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ttl_dns_cache=DNS_CACHE_TTL)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
            )
        return self._session

    async def close(self) -> None:
        """Close the shared session, if one was opened."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HttpResolver":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
