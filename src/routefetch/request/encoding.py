from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

from pydantic_core import PydanticSerializationError, to_json

from routefetch.domain.errors import EncodingError
from routefetch.domain.models import MappingParameters, Parameters, PathParameter

# RFC 3986 unreserved characters; everything else is percent-encoded
_UNRESERVED = "-._~"


@dataclass(frozen=True)
class EncodedParameters:
    url: str
    body: Optional[bytes] = None


def encode_parameters(url: str, parameters: Optional[Parameters], encoding: str) -> EncodedParameters:
    """
    Apply an endpoint's parameters to its URL or body.

      json -> body is the JSON encoding of a non-empty mapping
      url  -> ?key=value&... appended to the URL
      path -> /<value> appended to the URL
    """
    if parameters is None:
        return EncodedParameters(url=url)

    if encoding == "json":
        return EncodedParameters(url=url, body=_json_body(_require_mapping(parameters, encoding)))
    if encoding == "url":
        query = url_encoded_string(_require_mapping(parameters, encoding))
        if not query:
            return EncodedParameters(url=url)
        sep = "&" if "?" in url else "?"
        return EncodedParameters(url=f"{url}{sep}{query}")
    if encoding == "path":
        if not isinstance(parameters, PathParameter) or not isinstance(parameters.value, str):
            raise EncodingError(
                f"path encoding needs a single string parameter, got {type(parameters).__name__}"
            )
        return EncodedParameters(url=f"{url}/{parameters.value}")

    raise EncodingError(f"Unsupported parameter encoding: {encoding!r}")


def url_encoded_string(values: Mapping[str, Any]) -> str:
    """Percent-encode each key and value and join them as key=value pairs."""
    pairs: list[str] = []
    for key, value in values.items():
        if not isinstance(key, str):
            raise EncodingError(f"Query parameter keys must be strings, got {type(key).__name__}")
        pairs.append(f"{_percent_encode(key)}={_percent_encode(_query_text(value))}")
    return "&".join(pairs)


def _require_mapping(parameters: Parameters, encoding: str) -> Mapping[str, Any]:
    if not isinstance(parameters, MappingParameters):
        raise EncodingError(
            f"{encoding} encoding needs key/value parameters, got {type(parameters).__name__}"
        )
    return parameters.values


def _json_body(values: Mapping[str, Any]) -> Optional[bytes]:
    if not values:
        return None
    try:
        return to_json(dict(values))
    except PydanticSerializationError as exc:
        raise EncodingError(f"Parameters are not JSON serializable: {exc}") from exc


def _query_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _percent_encode(text: str) -> str:
    try:
        return quote(text, safe=_UNRESERVED)
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Cannot percent-encode {text!r}") from exc
