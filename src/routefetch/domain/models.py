from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Union

from routefetch.domain.errors import EncodingError

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]
ParameterEncoding = Literal["json", "url", "path"]

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD")

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_CONTENT_TYPES = {
    "json": JSON_CONTENT_TYPE,
    "url": FORM_CONTENT_TYPE,
    "path": FORM_CONTENT_TYPE,
}


def content_type(encoding: str) -> str:
    """Canonical Content-Type / Accept value for an encoding tag."""
    try:
        return _CONTENT_TYPES[encoding]
    except KeyError as exc:
        raise EncodingError(f"Unsupported parameter encoding: {encoding!r}") from exc


@dataclass(frozen=True)
class MappingParameters:
    """Key/value parameters, sent as a JSON body or a query string."""

    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PathParameter:
    """A single literal segment appended to the endpoint URL."""

    value: str


Parameters = Union[MappingParameters, PathParameter]


@dataclass(frozen=True)
class EndpointSpec:
    """
    Static description of one HTTP route.

    Built once per route by the catalogs in ``routefetch.routes`` and never
    mutated afterwards.
    """

    name: str                   # catalog name, e.g. general.status
    url: str                    # absolute URL without encoded parameters
    method: HttpMethod = "GET"
    headers: Optional[Mapping[str, str]] = None
    parameters: Optional[Parameters] = None
    encoding: ParameterEncoding = "json"
