from __future__ import annotations

from typing import Type, TypeVar

from routefetch.domain.errors import DeserializationError, NetworkError, ShapeMismatchError
from routefetch.domain.result import Failure, Result, Success
from routefetch.response.decoder import decode
from routefetch.transport.http import TransportOutcome

T = TypeVar("T")

NO_DATA_MESSAGE = "There was no data returned from the server"
PARSE_FAILED_MESSAGE = "Could not parse the data returned from the server."
DECODE_FAILED_MESSAGE = "Could not deserialize or decode the data"

# Only these codes are special-cased; anything else goes to the decoder.
STATUS_MESSAGES: dict[int, str] = {
    401: "Unauthorized",
    404: "Not Found",
    429: "Too Many Requests",
    498: "Expired Token",
}


def map_outcome(outcome: TransportOutcome, shape: Type[T]) -> Result[T]:
    """
    Classify a transport outcome, in priority order:
    transport error, missing body, known status code, decode.
    """
    if outcome.error is not None:
        return Failure(NetworkError.server_error(outcome.error))

    if outcome.body is None:
        return Failure(NetworkError.server_error(NO_DATA_MESSAGE))

    status_message = STATUS_MESSAGES.get(outcome.status_code) if outcome.status_code else None
    if status_message is not None:
        return Failure(NetworkError.server_error(status_message))

    try:
        value = decode(outcome.body, shape)
    except ShapeMismatchError:
        return Failure(NetworkError.server_error(PARSE_FAILED_MESSAGE))
    except DeserializationError:
        return Failure(NetworkError.server_error(DECODE_FAILED_MESSAGE))

    return Success(value)
