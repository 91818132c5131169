"""Syntactic validation of user-entered values against Solidity types.

``validate`` checks a single primitive value. ``validate_field`` accepts the
raw string a form field holds, which for arrays is a JSON list of item strings
and for tuples a JSON object keyed by member name, and recurses through it.
"""

from __future__ import annotations

import json
import re

from abi_forms.core.config import require_even_length_bytes
from abi_forms.core.errors import FieldValidationError
from abi_forms.core.signature.type_signature import (
    array_length,
    is_array_type,
    is_tuple_signature,
    member_keys,
    parse_type_signature,
    split_array_suffix,
)
from abi_forms.core.types import ValidationResult

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_BYTES_RE = re.compile(r"0x[0-9a-fA-F]*")
_FIXED_BYTES_TYPE_RE = re.compile(r"bytes(\d+)")
_INT_TYPE_RE = re.compile(r"(u?)int(\d*)")
_DECIMAL_RE = re.compile(r"-?\d+")
_HEX_INT_RE = re.compile(r"0x[0-9a-fA-F]+")

# 2**256 has 78 decimal digits
_MAX_INT_DIGITS = 78
_OUT_OF_RANGE = 1 << 257


def _int_bits(type_str: str) -> tuple[bool, int] | None:
    match = _INT_TYPE_RE.fullmatch(type_str)
    if not match:
        return None
    signed = match.group(1) == ""
    bits = int(match.group(2)) if match.group(2) else 256
    if bits < 8 or bits > 256 or bits % 8:
        return None
    return signed, bits


def _parse_int(value: str) -> int | None:
    text = value.strip()
    if _DECIMAL_RE.fullmatch(text):
        sign = -1 if text.startswith("-") else 1
        digits = text.lstrip("-").lstrip("0") or "0"
        if len(digits) > _MAX_INT_DIGITS:
            # Wider than any 256-bit value
            return sign * _OUT_OF_RANGE
        return sign * int(digits)
    if _HEX_INT_RE.fullmatch(text):
        return int(text, 16)
    return None


def _validate_int(
    value: str, type_str: str, signed: bool, bits: int
) -> ValidationResult:
    parsed = _parse_int(value)
    if parsed is None:
        return ValidationResult.invalid(f"Invalid integer value for {type_str}")

    if not signed:
        if parsed < 0:
            return ValidationResult.invalid("Unsigned integer cannot be negative")
        if parsed > (1 << bits) - 1:
            return ValidationResult.invalid(f"Value exceeds maximum for {type_str}")
        return ValidationResult.ok()

    max_value = (1 << (bits - 1)) - 1
    min_value = -(1 << (bits - 1))
    if parsed > max_value or parsed < min_value:
        return ValidationResult.invalid(f"Value out of range for {type_str}")
    return ValidationResult.ok()


def validate(value: str, type_str: str) -> ValidationResult:
    """Validate one primitive value; never raises."""
    if type_str == "string":
        return ValidationResult.ok()

    if not value.strip() and value != "false":
        return ValidationResult.invalid("Value cannot be empty")

    int_spec = _int_bits(type_str)
    if int_spec is not None:
        return _validate_int(value, type_str, *int_spec)

    if type_str == "bool":
        if value not in ("true", "false"):
            return ValidationResult.invalid('Boolean must be "true" or "false"')
        return ValidationResult.ok()

    if type_str == "address":
        if not _ADDRESS_RE.fullmatch(value):
            return ValidationResult.invalid("Invalid Ethereum address format")
        return ValidationResult.ok()

    if type_str == "bytes":
        if not _BYTES_RE.fullmatch(value):
            return ValidationResult.invalid("Bytes must be hex format starting with 0x")
        if require_even_length_bytes() and len(value) % 2:
            return ValidationResult.invalid(
                "Bytes must have an even number of hex digits"
            )
        return ValidationResult.ok()

    fixed = _FIXED_BYTES_TYPE_RE.fullmatch(type_str)
    if fixed and 1 <= int(fixed.group(1)) <= 32:
        size = int(fixed.group(1))
        expected_length = size * 2 + 2
        if not value.startswith("0x"):
            return ValidationResult.invalid("Bytes must start with 0x")
        if len(value) != expected_length:
            return ValidationResult.invalid(
                f"{type_str} must be exactly {size} bytes "
                f"({expected_length} chars including 0x)"
            )
        if not _BYTES_RE.fullmatch(value):
            return ValidationResult.invalid("Bytes must contain only hex characters")
        return ValidationResult.ok()

    return ValidationResult.invalid(f"Unsupported type: {type_str}")


def _as_text(item: object) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, (dict, list)):
        return json.dumps(item)
    return str(item)


def _validate_array(raw: str, type_str: str) -> ValidationResult:
    element_type, suffix = split_array_suffix(type_str)
    if not raw or raw == "[]":
        return ValidationResult.ok()
    try:
        items = json.loads(raw)
    except ValueError:
        # The array widget resets unparseable input to an empty list
        return ValidationResult.ok()
    if not isinstance(items, list):
        return ValidationResult.ok()

    expected = array_length(suffix)
    if expected is not None and len(items) != expected:
        return ValidationResult.invalid(
            f"{type_str} requires exactly {expected} items, got {len(items)}"
        )

    for item in items:
        if not validate_field(_as_text(item), element_type).valid:
            return ValidationResult.invalid("One or more array items are invalid")
    return ValidationResult.ok()


def _validate_tuple(raw: str, type_str: str) -> ValidationResult:
    if not raw:
        return ValidationResult.ok()
    try:
        members = json.loads(raw)
    except ValueError:
        return ValidationResult.invalid("Tuple value must be a JSON object")
    if not isinstance(members, dict):
        return ValidationResult.invalid("Tuple value must be a JSON object")

    fields = parse_type_signature(type_str)
    keys = member_keys([field.name for field in fields])
    for field, key in zip(fields, keys, strict=True):
        result = validate_field(_as_text(members.get(key, "")), field.type)
        if not result.valid:
            return ValidationResult.invalid(f"{key}: {result.error}")
    return ValidationResult.ok()


def validate_field(raw: str, type_str: str) -> ValidationResult:
    """Validate the raw string stored for a form field of any supported type."""
    if is_array_type(type_str):
        return _validate_array(raw, type_str)
    if is_tuple_signature(type_str):
        return _validate_tuple(raw, type_str)
    if type_str == "tuple":
        # Unexpanded tuple without structure, nothing to check against
        return ValidationResult.ok()
    return validate(raw, type_str)


def default_value(type_str: str) -> str:
    """Initial value for a freshly added array item of ``type_str``."""
    if _int_bits(type_str) is not None:
        return "0"
    if type_str == "bool":
        return "false"
    if type_str == "address":
        return ZERO_ADDRESS
    fixed = _FIXED_BYTES_TYPE_RE.fullmatch(type_str)
    if fixed:
        return "0x" + "0" * (int(fixed.group(1)) * 2)
    if type_str == "bytes":
        return "0x"
    return ""


def check_field(raw: str, type_str: str) -> None:
    """Like ``validate_field`` but raises ``FieldValidationError``."""
    result = validate_field(raw, type_str)
    if not result.valid:
        raise FieldValidationError(type_str, result.error or "Invalid value")
