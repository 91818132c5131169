"""Literal value preview, e.g. ``"0x12", (1, (2, 3)), [4, 5]``.

The preview is what the call assembler later tokenizes into encoder
arguments, so member order must follow the declared type, not the order in
which the user happened to fill fields in.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from abi_forms.core.errors import FormatFallbackError
from abi_forms.core.signature.type_signature import (
    is_array_type,
    is_tuple_signature,
    member_keys,
    parse_type_signature,
    split_array_suffix,
    strip_tuple_suffix,
)
from abi_forms.core.types import LinearizedParameter
from abi_forms.core.values import (
    ArrayValue,
    Scalar,
    TupleValue,
    Value,
    decode_value,
    scalar_text,
)

PLACEHOLDER = "..."
BROKEN_TUPLE = "(...)"

_NUMERIC_LIKE_RE = re.compile(
    r"^\s*(-?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?|0x[0-9a-fA-F]+)?\s*$", re.IGNORECASE
)


def _quote(text: str) -> str:
    return f'"{text}"'


def _unquote(text: str) -> str:
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def render_value(value: Value, type_str: str) -> str:
    if isinstance(value, Scalar):
        if value.literal or type_str != "string":
            return value.text
        return _quote(value.text)

    if isinstance(value, ArrayValue):
        element_type, _ = split_array_suffix(type_str)
        return "[" + ", ".join(render_value(i, element_type) for i in value.items) + "]"

    return _render_tuple(value, type_str)


def _render_tuple(value: TupleValue, type_str: str) -> str:
    tuple_part, _ = strip_tuple_suffix(type_str)
    fields = parse_type_signature(tuple_part)
    parts: list[str] = []
    for field, key in zip(fields, member_keys([f.name for f in fields]), strict=True):
        member = value.get(key)
        if member is None:
            parts.append(PLACEHOLDER)
        elif field.type == "string" and isinstance(member, Scalar):
            parts.append(_quote(_unquote(member.text)))
        else:
            parts.append(render_value(member, field.type))
    return "(" + ", ".join(parts) + ")"


def format_tuple(tuple_value: str | Mapping[str, Any]) -> str:
    """Best-effort tuple formatting when the member structure is unknown.

    Scalar members come first in insertion order, followed by members that
    look like nested tuples. Raises ``ValueError`` on undecodable JSON.
    """
    if (
        isinstance(tuple_value, str)
        and tuple_value.startswith("(")
        and tuple_value.endswith(")")
    ):
        return tuple_value

    obj = json.loads(tuple_value) if isinstance(tuple_value, str) else tuple_value
    if not isinstance(obj, Mapping):
        return "()"

    nested_keys = [
        key
        for key, val in obj.items()
        if isinstance(val, Mapping)
        or (isinstance(val, str) and val.startswith("{") and val.endswith("}"))
    ]
    scalar_keys = [key for key in obj if key not in nested_keys]

    values = [_format_loose_scalar(obj[key]) for key in scalar_keys]
    values.extend(safe_format_tuple(obj[key]) for key in nested_keys)
    return "(" + ", ".join(values) + ")"


def _format_loose_scalar(val: Any) -> str:
    if not isinstance(val, str):
        return scalar_text(val)
    if val in ("true", "false") or _NUMERIC_LIKE_RE.match(val):
        return val
    if val.startswith('"') and val.endswith('"'):
        return val
    return _quote(val)


def safe_format_tuple(tuple_value: Any) -> str:
    try:
        return format_tuple(tuple_value)
    except (ValueError, TypeError) as exc:
        logger.debug(f"Tuple value could not be formatted: {exc}")
        return BROKEN_TUPLE


def format_tuple_with_structure(
    value: str | Mapping[str, Any], type_signature: str
) -> str:
    """Format a tuple value in the member order declared by ``type_signature``.

    Members missing from the value render as ``...``; nested tuples that
    cannot be decoded fall back to ``format_tuple``. Raises
    ``FormatFallbackError`` when ``value`` itself is not valid JSON.
    """
    obj: Any = value
    if isinstance(value, str):
        try:
            obj = json.loads(value)
        except ValueError as exc:
            raise FormatFallbackError(f"Tuple value is not JSON: {value!r}") from exc
    if not isinstance(obj, Mapping):
        return "()"

    if not parse_type_signature(type_signature):
        return format_tuple(obj)

    decoded = decode_value(dict(obj), type_signature, fallback=safe_format_tuple)
    return render_value(decoded, type_signature)


def _format_array(value: str, type_str: str) -> str:
    element_type, _ = split_array_suffix(type_str)
    if element_type.startswith("tuple"):
        # No member structure to go on
        try:
            items = json.loads(value)
        except ValueError:
            return "[]"
        if not isinstance(items, list):
            return "[]"
        return "[" + ", ".join(safe_format_tuple(item) for item in items) + "]"

    decoded = decode_value(value, type_str, fallback=safe_format_tuple)
    return render_value(decoded, type_str)


def format_value(value: str, type_str: str) -> str:
    """Render one field's stored string as a literal for the value preview."""
    if type_str == "string":
        return _quote(value)

    if is_array_type(type_str):
        if not value or value == "[]":
            return "[]"
        return _format_array(value, type_str)

    if not value:
        return ""

    if is_tuple_signature(type_str):
        try:
            return format_tuple_with_structure(value, type_str)
        except FormatFallbackError as exc:
            logger.debug(f"Falling back to unstructured tuple formatting: {exc}")
            return safe_format_tuple(value)

    if type_str.startswith("tuple"):
        return safe_format_tuple(value)

    return value


def format_preview(
    params: Sequence[LinearizedParameter], values: Mapping[str, str]
) -> str:
    """Join the formatted root parameters with ``, `` in declaration order."""
    roots = [p for p in params if not p.path and p.name]
    return ", ".join(format_value(values.get(p.name, ""), p.type) for p in roots)
