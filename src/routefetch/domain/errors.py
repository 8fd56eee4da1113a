from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NetworkErrorKind = Literal["generic", "invalid_resource", "server_error"]

GENERIC_DESCRIPTION = "An error has occurred. Please try again."
INVALID_RESOURCE_DESCRIPTION = "Invalid parameters sent to the server."


@dataclass(frozen=True)
class NetworkError:
    """Error half of a fetch result. Delivered to callers, never raised."""

    kind: NetworkErrorKind
    message: str = ""

    @classmethod
    def generic(cls) -> "NetworkError":
        return cls(kind="generic")

    @classmethod
    def invalid_resource(cls, detail: str = "") -> "NetworkError":
        return cls(kind="invalid_resource", message=detail)

    @classmethod
    def server_error(cls, message: str) -> "NetworkError":
        return cls(kind="server_error", message=message)

    @property
    def description(self) -> str:
        if self.kind == "generic":
            return GENERIC_DESCRIPTION
        if self.kind == "invalid_resource":
            return INVALID_RESOURCE_DESCRIPTION
        return self.message

    def __str__(self) -> str:
        return self.description


class RoutefetchError(Exception):
    """Base class for errors raised inside the request pipeline."""


class RequestBuildError(RoutefetchError):
    """An endpoint could not be turned into a request."""


class EncodingError(RequestBuildError):
    """Parameters do not fit the endpoint's encoding."""


class InvalidURLError(RequestBuildError):
    """The final request URL is not a usable http(s) URL."""


class DecodeError(RoutefetchError):
    """A response body could not be decoded into the requested shape."""


class DeserializationError(DecodeError):
    """The body is not well-formed JSON."""


class ShapeMismatchError(DecodeError):
    """The body is valid JSON but does not match the requested shape."""


class ConfigError(RoutefetchError):
    """Client configuration is missing or invalid."""


class JSONError(RoutefetchError):
    """A value cannot be represented as a JSON value."""
