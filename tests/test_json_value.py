import math

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from routefetch.domain.errors import JSONError
from routefetch.domain.json_value import JSON


def _samples():
    return [
        JSON.string("hello"),
        JSON.number(1.5),
        JSON.boolean(True),
        JSON.null(),
        JSON.array([JSON.number(1), JSON.string("two"), JSON.null()]),
        JSON.object({"a": JSON.array([]), "b": JSON.object({"c": JSON.boolean(False)})}),
    ]


def test_encode_decode_round_trip():
    for value in _samples():
        assert JSON.decode(value.encode()) == value


def test_from_python_literals():
    v = JSON.from_python({"n": 3, "f": 0.5, "s": "x", "b": True, "z": None, "l": [1, "a"]})
    assert v == JSON.object(
        {
            "n": JSON.number(3.0),
            "f": JSON.number(0.5),
            "s": JSON.string("x"),
            "b": JSON.boolean(True),
            "z": JSON.null(),
            "l": JSON.array([JSON.number(1), JSON.string("a")]),
        }
    )


def test_bool_is_not_a_number():
    assert JSON.from_python(True).kind == "bool"
    assert JSON.from_python(True) != JSON.from_python(1)


def test_object_equality_ignores_key_order():
    a = JSON.from_pairs([("x", 1), ("y", 2)])
    b = JSON.from_pairs([("y", 2), ("x", 1)])
    assert a == b


def test_duplicate_keys_last_write_wins():
    v = JSON.from_pairs([("k", 1), ("other", "o"), ("k", 2)])
    assert v.to_python() == {"k": 2.0, "other": "o"}


def test_different_kinds_are_not_equal():
    assert JSON.string("1") != JSON.number(1)
    assert JSON.array([]) != JSON.object({})
    assert JSON.null() == JSON.null()


def test_rejects_non_json_values():
    with pytest.raises(JSONError):
        JSON.from_python({1: "x"})
    with pytest.raises(JSONError):
        JSON.from_python({"when": object()})


def test_decode_rejects_garbage():
    with pytest.raises(JSONError):
        JSON.decode(b"{not json")


def test_non_finite_numbers_cannot_be_encoded():
    with pytest.raises(JSONError):
        JSON.number(math.inf).encode()


def test_repr_of_scalars_and_containers():
    assert repr(JSON.null()) == "null"
    assert repr(JSON.boolean(False)) == "false"
    assert repr(JSON.string("a")) == "'a'"
    assert '"k": 1.0' in repr(JSON.from_python({"k": 1}))


def test_from_model():
    class Point(BaseModel):
        x: int
        y: int

    assert JSON.from_model(Point(x=1, y=2)) == JSON.from_python({"x": 1, "y": 2})


def test_pydantic_validation_target():
    adapter = TypeAdapter(JSON)
    assert adapter.validate_json(b'{"ok": [true, null]}') == JSON.from_python({"ok": [True, None]})
    assert adapter.dump_python(JSON.from_python([1, "a"])) == [1.0, "a"]

    with pytest.raises(ValidationError):
        adapter.validate_python({1: 2})


def test_module_docstring_is_exposed():
    from routefetch.domain import json_value

    assert json_value.__doc__.startswith("A JSON value type.")
