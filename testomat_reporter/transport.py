"""HTTP transport for the reporter API."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Literal

import aiohttp
from yarl import URL

from testomat_reporter.errors import TransportError

log = logging.getLogger(__name__)

Method = Literal["POST", "PUT"]


@dataclass(frozen=True, kw_only=True)
class Response:
    """Status code and body text of an HTTP response."""

    status: int
    body: str


class Transport(ABC):
    """Sends one JSON request and returns the raw response."""

    @abstractmethod
    async def send(self, method: Method, url: URL, body: str, timeout: float) -> Response:
        """Send a request.

        Args:
            method: HTTP method
            url: Absolute request URL, query string included
            body: JSON document sent as the request body
            timeout: Total seconds allowed for the call

        Returns:
            Response status and body

        Raises:
            TransportError: On timeout or connection failure

        """


@dataclass(frozen=True, kw_only=True)
class AiohttpTransport(Transport):
    """Transport backed by a shared aiohttp session."""

    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def open(cls) -> AsyncGenerator["AiohttpTransport", None]:
        """Create transport with managed session lifecycle."""
        headers = {"Content-Type": "application/json"}
        async with aiohttp.ClientSession(headers=headers) as session:
            yield cls(session=session)

    async def send(self, method: Method, url: URL, body: str, timeout: float) -> Response:
        """Send a request, mapping network failures to TransportError."""
        try:
            async with self.session.request(
                method,
                url,
                data=body,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                return Response(status=response.status, body=await response.text())
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            log.debug("%s %s failed: %r", method, url.path, exc)
            raise TransportError(f"{method} {url.path} failed: {exc!r}") from exc
