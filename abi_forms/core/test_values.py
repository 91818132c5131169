import json

import pytest

from abi_forms.core.errors import FormatFallbackError
from abi_forms.core.values import (
    ArrayValue,
    Scalar,
    TupleValue,
    decode_value,
    to_native,
    to_wire,
)

TUPLE_TYPE = "(uint256 a, (bool b, string c) inner)"


def test_decode_scalar():
    assert decode_value("42", "uint256") == Scalar("42")
    assert decode_value(True, "bool") == Scalar("true")


def test_decode_array():
    assert decode_value('["1", "2"]', "uint8[]") == ArrayValue(
        (Scalar("1"), Scalar("2"))
    )
    assert decode_value("", "uint8[]") == ArrayValue()
    assert decode_value("garbage", "uint8[]") == ArrayValue()
    assert decode_value('{"a": 1}', "uint8[]") == ArrayValue()


def test_decode_tuple_follows_declared_members():
    raw = json.dumps({"inner": json.dumps({"b": "true"}), "a": "7", "extra": "x"})
    value = decode_value(raw, TUPLE_TYPE)
    assert isinstance(value, TupleValue)
    assert [name for name, _ in value.members] == ["a", "inner"]
    assert value.get("a") == Scalar("7")
    assert value.get("inner") == TupleValue((("b", Scalar("true")),))
    assert "extra" not in value
    assert value.get("missing") is None


def test_decode_tuple_failure_without_fallback():
    with pytest.raises(FormatFallbackError):
        decode_value("not json", TUPLE_TYPE)
    with pytest.raises(FormatFallbackError):
        decode_value("[1]", TUPLE_TYPE)


def test_decode_tuple_failure_with_fallback():
    value = decode_value("not json", TUPLE_TYPE, fallback=lambda raw: "(?)")
    assert value == Scalar("(?)", literal=True)


def test_to_wire():
    assert to_wire("abc") == "abc"
    assert to_wire(5) == "5"
    assert to_wire(False) == "false"
    assert to_wire(None) == ""
    assert to_wire(["1", 2, True]) == '["1", "2", "true"]'
    assert json.loads(to_wire({"a": 1, "inner": {"b": False}})) == {
        "a": "1",
        "inner": {"b": "false"},
    }


def test_tagged_value_to_wire():
    value = TupleValue((("a", Scalar("1")), ("xs", ArrayValue((Scalar("2"),)))))
    assert to_native(value) == {"a": "1", "xs": ["2"]}
    assert json.loads(to_wire(value)) == {"a": "1", "xs": ["2"]}


def test_decode_tuple_with_unnamed_members():
    value = decode_value('{"param0": "1", "param1": "true"}', "(uint256, bool)")
    assert value == TupleValue((("param0", Scalar("1")), ("param1", Scalar("true"))))


def test_decode_array_with_oversized_json_number():
    assert decode_value("[" + "1" * 5000 + "]", "uint256[]") == ArrayValue()
