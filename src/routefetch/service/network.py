from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Type, TypeVar

from routefetch.config.settings import ClientConfig
from routefetch.domain.errors import NetworkError, RequestBuildError
from routefetch.domain.models import EndpointSpec
from routefetch.domain.result import Failure, Result
from routefetch.request.builder import BuiltRequest, RequestBuilder
from routefetch.response.mapper import map_outcome
from routefetch.transport.http import HTTPXTransport, TransportOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RULE = "=" * 62
_THIN_RULE = "-" * 62


class NetworkService:
    """
    Entry point for callers: endpoint in, typed Result out.

    Results are produced on the event loop that runs the request. Anything
    that touches UI state must be handed over to that context by the caller.
    """

    def __init__(self, config: ClientConfig, transport: Optional[HTTPXTransport] = None):
        self.config = config
        self.builder = RequestBuilder(config)
        self.transport = transport or HTTPXTransport(timeout_s=config.timeout_s)

    async def __aenter__(self) -> "NetworkService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def fetch(self, endpoint: EndpointSpec, shape: Type[T]) -> Result[T]:
        try:
            request = self.builder.build(endpoint)
        except RequestBuildError as exc:
            logger.warning("Invalid resource %s: %s", endpoint.name, exc)
            return Failure(NetworkError.invalid_resource(str(exc)))

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(_format_request(request))

        outcome = await self.transport.send(request)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(_format_response(outcome))

        return map_outcome(outcome, shape)

    def request(
        self,
        endpoint: EndpointSpec,
        shape: Type[T],
        completion: Callable[[Result[T]], None],
    ) -> asyncio.Task:
        """
        Schedule a fetch on the running loop; ``completion`` is called exactly
        once with the result, from the returned task.
        """

        async def _run() -> None:
            result = await self.fetch(endpoint, shape)
            completion(result)

        return asyncio.ensure_future(_run())

    async def cancel_all_requests(self) -> None:
        await self.transport.cancel_all()

    async def aclose(self) -> None:
        await self.transport.aclose()


async def fetch(service: NetworkService, endpoint: EndpointSpec, shape: Type[T]) -> Result[T]:
    return await service.fetch(endpoint, shape)


def _format_request(request: BuiltRequest) -> str:
    body = request.body.decode("utf-8", errors="replace") if request.body else "No HTTP Body"
    return "\n".join(
        [
            "Request:",
            _RULE,
            f"Url: {request.url}",
            f"Method: {request.method}",
            _THIN_RULE,
            "Headers:",
            str(dict(request.headers)),
            _THIN_RULE,
            "Body:",
            body,
            _RULE,
        ]
    )


def _format_response(outcome: TransportOutcome) -> str:
    lines = ["Response:", _RULE, f"Url: {outcome.url}"]
    if outcome.status_code is not None:
        lines += [f"Status: {outcome.status_code}", _THIN_RULE, "Headers:", str(outcome.headers)]
    lines += [_THIN_RULE, "Body:"]
    if outcome.body:
        lines.append(outcome.body.decode("utf-8", errors="replace"))
    lines += [_THIN_RULE, "Error:", outcome.error or "None", _RULE]
    return "\n".join(lines)
