"""Form values as a tagged tree instead of loosely typed strings.

Form fields store plain strings: scalars verbatim, arrays as a JSON list and
tuples as a JSON object keyed by member name (members of nested tuples may
themselves be JSON-encoded objects). ``decode_value`` turns that wire form
into ``Scalar``/``ArrayValue``/``TupleValue`` using the declared type, and
``to_wire`` goes back.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from abi_forms.core.errors import FormatFallbackError
from abi_forms.core.signature.type_signature import (
    is_array_type,
    is_tuple_signature,
    member_keys,
    parse_type_signature,
    split_array_suffix,
)


@dataclass(frozen=True)
class Scalar:
    text: str
    # Already rendered preview text that must be emitted verbatim
    literal: bool = False


@dataclass(frozen=True)
class ArrayValue:
    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class TupleValue:
    members: tuple[tuple[str, Value], ...] = ()

    def get(self, name: str) -> Value | None:
        for key, value in self.members:
            if key == name:
                return value
        return None

    def __contains__(self, name: str) -> bool:
        return any(key == name for key, _ in self.members)


Value = Union[Scalar, ArrayValue, TupleValue]


def scalar_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, bool):
        return "true" if item else "false"
    if item is None:
        return ""
    return str(item)


def _load_json(raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise FormatFallbackError(f"Invalid JSON value: {raw!r}") from exc


def decode_value(
    raw: Any,
    type_str: str,
    fallback: Callable[[Any], str] | None = None,
) -> Value:
    """Decode a wire value (string, or already-parsed JSON) for ``type_str``.

    Arrays degrade to an empty ``ArrayValue`` when the input is not a list.
    Tuples raise ``FormatFallbackError`` when the input is not an object,
    unless *fallback* is given, in which case the undecodable tuple becomes a
    literal ``Scalar`` holding ``fallback(raw)``.
    """
    if is_array_type(type_str):
        element_type, _ = split_array_suffix(type_str)
        try:
            items = _load_json(raw) if raw != "" else []
        except FormatFallbackError:
            items = []
        if not isinstance(items, list):
            items = []
        return ArrayValue(
            tuple(decode_value(item, element_type, fallback) for item in items)
        )

    if is_tuple_signature(type_str):
        try:
            obj = _load_json(raw)
            if not isinstance(obj, dict):
                raise FormatFallbackError(f"Tuple value is not an object: {raw!r}")
        except FormatFallbackError:
            if fallback is None:
                raise
            return Scalar(fallback(raw), literal=True)
        fields = parse_type_signature(type_str)
        keys = member_keys([f.name for f in fields])
        members = [
            (key, decode_value(obj[key], field.type, fallback))
            for field, key in zip(fields, keys, strict=True)
            if key in obj
        ]
        return TupleValue(tuple(members))

    return Scalar(scalar_text(raw))


def to_native(value: Value) -> Any:
    if isinstance(value, ArrayValue):
        return [to_native(item) for item in value.items]
    if isinstance(value, TupleValue):
        return {name: to_native(member) for name, member in value.members}
    return value.text


def to_wire(value: Value | Any) -> str:
    """Encode a ``Value`` (or plain str/list/dict) as the string a field stores."""
    if isinstance(value, (Scalar, ArrayValue, TupleValue)):
        value = to_native(value)
    if isinstance(value, (list, dict)):
        return json.dumps(_stringify(value))
    return scalar_text(value)


def _stringify(obj: Any) -> Any:
    if isinstance(obj, list):
        return [_stringify(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): _stringify(v) for k, v in obj.items()}
    return scalar_text(obj)
