from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from routefetch.config.settings import ClientConfig
from routefetch.domain.errors import InvalidURLError, RequestBuildError
from routefetch.domain.models import HTTP_METHODS, EndpointSpec, content_type
from routefetch.request.encoding import encode_parameters

API_KEY_HEADER = "apiKey"


@dataclass(frozen=True)
class BuiltRequest:
    """Wire-level request derived from one EndpointSpec for a single call."""

    url: str
    method: str
    headers: httpx.Headers
    body: Optional[bytes] = None

    def to_httpx(self, client: httpx.AsyncClient) -> httpx.Request:
        return client.build_request(self.method, self.url, headers=self.headers, content=self.body)


class RequestBuilder:
    def __init__(self, config: ClientConfig):
        self.config = config

    def build(self, endpoint: EndpointSpec) -> BuiltRequest:
        """
        Raises:
            EncodingError: parameters do not fit the endpoint encoding.
            InvalidURLError: the final URL is not a usable http(s) URL.
            RequestBuildError: unknown HTTP method.
        """
        method = str(endpoint.method).upper()
        if method not in HTTP_METHODS:
            raise RequestBuildError(f"Unsupported HTTP method: {endpoint.method!r}")

        encoded = encode_parameters(endpoint.url, endpoint.parameters, endpoint.encoding)
        _check_url(encoded.url)

        mime = content_type(endpoint.encoding)
        headers = httpx.Headers()
        headers["Content-Type"] = mime
        headers["Accept"] = mime
        # endpoint headers override the defaults (case-insensitive, last write wins)
        for key, value in (endpoint.headers or {}).items():
            headers[key] = value
        headers[API_KEY_HEADER] = self.config.api_key

        return BuiltRequest(url=encoded.url, method=method, headers=headers, body=encoded.body)


def _check_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(f"Invalid URL {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURLError(f"Invalid URL {url!r}: expected an absolute http(s) URL")
