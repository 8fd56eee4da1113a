"""A JSON value type.

Only valid JSON values can be represented, values compare structurally, and
they encode to and decode from bytes. It is also accepted by pydantic as a
validation target, so schemaless routes can be fetched as ``JSON``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping

from pydantic import BaseModel
from pydantic_core import core_schema

from routefetch.domain.errors import JSONError

JSONKind = Literal["string", "number", "object", "array", "bool", "null"]


@dataclass(frozen=True)
class JSON:
    kind: JSONKind
    value: Any = None

    # ----------------------------
    # Construction
    # ----------------------------

    @classmethod
    def string(cls, value: str) -> "JSON":
        return cls("string", value)

    @classmethod
    def number(cls, value: float) -> "JSON":
        return cls("number", float(value))

    @classmethod
    def object(cls, members: Mapping[str, "JSON"]) -> "JSON":
        return cls("object", dict(members))

    @classmethod
    def array(cls, items: Iterable["JSON"]) -> "JSON":
        return cls("array", list(items))

    @classmethod
    def boolean(cls, value: bool) -> "JSON":
        return cls("bool", bool(value))

    @classmethod
    def null(cls) -> "JSON":
        return cls("null")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> "JSON":
        """Object from key/value pairs; a repeated key keeps its last value."""
        members: dict[str, JSON] = {}
        for key, value in pairs:
            members[key] = value if isinstance(value, JSON) else cls.from_python(value)
        return cls("object", members)

    @classmethod
    def from_python(cls, value: Any) -> "JSON":
        """
        Build a JSON value from plain Python data: str, int, float, bool, None,
        lists/tuples of those, or dicts with string keys.
        """
        if isinstance(value, JSON):
            return value
        if isinstance(value, dict):
            members: dict[str, JSON] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise JSONError(f"Object keys must be strings, got {type(key).__name__}")
                members[key] = cls.from_python(item)
            return cls("object", members)
        if isinstance(value, (list, tuple)):
            return cls("array", [cls.from_python(v) for v in value])
        if isinstance(value, str):
            return cls("string", value)
        # bool is an int subclass, so it has to be checked first
        if isinstance(value, bool):
            return cls("bool", value)
        if isinstance(value, (int, float)):
            return cls("number", float(value))
        if value is None:
            return cls("null")
        raise JSONError(f"Not a JSON value: {type(value).__name__}")

    @classmethod
    def from_model(cls, model: BaseModel) -> "JSON":
        """The raw JSON value a pydantic model serializes into."""
        return cls.from_python(model.model_dump(mode="json"))

    # ----------------------------
    # Conversion
    # ----------------------------

    def to_python(self) -> Any:
        if self.kind == "object":
            return {k: v.to_python() for k, v in self.value.items()}
        if self.kind == "array":
            return [v.to_python() for v in self.value]
        return self.value

    def encode(self, indent: int | None = None) -> bytes:
        try:
            text = json.dumps(self.to_python(), allow_nan=False, ensure_ascii=False, indent=indent)
        except ValueError as exc:
            raise JSONError(f"Cannot encode JSON value: {exc}") from exc
        return text.encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str) -> "JSON":
        try:
            raw = json.loads(data)
        except ValueError as exc:
            raise JSONError(f"Invalid JSON value: {exc}") from exc
        return cls.from_python(raw)

    def __repr__(self) -> str:
        if self.kind == "string":
            return repr(self.value)
        if self.kind == "number":
            return repr(self.value)
        if self.kind == "bool":
            return "true" if self.value else "false"
        if self.kind == "null":
            return "null"
        return self.encode(indent=2).decode("utf-8")

    # ----------------------------
    # pydantic integration
    # ----------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda v: v.to_python()),
        )


def _validate(value: Any) -> JSON:
    try:
        return JSON.from_python(value)
    except JSONError as exc:
        # pydantic turns ValueError into a ValidationError
        raise ValueError(str(exc)) from exc

