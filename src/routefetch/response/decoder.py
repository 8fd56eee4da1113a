from __future__ import annotations

from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import from_json

from routefetch.domain.errors import DeserializationError, ShapeMismatchError

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def decode(body: bytes, shape: Type[T]) -> T:
    """
    Decode a JSON body into ``shape`` (a pydantic model, JSON, or any type
    pydantic can validate).

    Raises:
        DeserializationError: the body is not well-formed JSON.
        ShapeMismatchError: the JSON does not match ``shape``.
    """
    try:
        raw = from_json(body)
    except ValueError as exc:
        raise DeserializationError(f"Malformed JSON body: {exc}") from exc

    try:
        return _adapter(shape).validate_python(raw)
    except ValidationError as exc:
        raise ShapeMismatchError(
            f"Body does not match {getattr(shape, '__name__', shape)!s}: {exc.error_count()} error(s)"
        ) from exc
