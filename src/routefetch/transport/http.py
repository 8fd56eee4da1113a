"""Async HTTP transport over a shared, connection-pooled httpx client."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

import httpx

from routefetch.config.settings import DEFAULT_TIMEOUT_S
from routefetch.request.builder import BuiltRequest

CANCELLED_MESSAGE = "cancelled"


@dataclass(frozen=True)
class TransportOutcome:
    """Raw result of one exchange: either an error or a status and body."""

    url: str
    status_code: Optional[int] = None
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, url: str, error: str) -> "TransportOutcome":
        return cls(url=url, error=error)


class HTTPXTransport:
    """
    Sends BuiltRequests through one pooled ``httpx.AsyncClient``.

    Network failures are reported in the outcome, never raised. Cancellation
    is all-or-nothing: ``cancel_all`` aborts every in-flight request and
    invalidates the client; the next request opens a fresh one.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        follow_redirects: bool = True,
    ):
        self.timeout_s = timeout_s
        self._transport = transport
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self._follow_redirects = follow_redirects
        self._client: Optional[httpx.AsyncClient] = None
        self._in_flight: set[asyncio.Task] = set()
        self._invalidated: set[asyncio.Task] = set()

    async def __aenter__(self) -> "HTTPXTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_s,
                limits=self._limits,
                follow_redirects=self._follow_redirects,
                transport=self._transport,
            )
        return self._client

    async def send(self, request: BuiltRequest) -> TransportOutcome:
        client = self._ensure_client()
        task = asyncio.ensure_future(client.send(request.to_httpx(client)))
        self._in_flight.add(task)
        try:
            response = await task
        except asyncio.CancelledError:
            if task not in self._invalidated:
                raise
            self._invalidated.discard(task)
            return TransportOutcome.failed(request.url, CANCELLED_MESSAGE)
        except httpx.HTTPError as exc:
            return TransportOutcome.failed(request.url, _describe(exc))
        finally:
            self._in_flight.discard(task)

        return TransportOutcome(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def cancel_all(self) -> None:
        for task in list(self._in_flight):
            if not task.done():
                self._invalidated.add(task)
                task.cancel()
        # let cancelled sends unwind before the pool goes away
        await asyncio.sleep(0)
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _describe(exc: httpx.HTTPError) -> str:
    text = str(exc)
    if text:
        return text
    if isinstance(exc, httpx.TimeoutException):
        return "The request timed out."
    return type(exc).__name__
