"""Turn a signature plus a value preview into calldata.

The value preview is the literal form produced by ``format_preview``::

    "hello", [1, 2], (0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed, true)

It is tokenized here into nested Python values (tuples for tuple literals,
lists for arrays) and handed to ``encode_call``. Integer literals become
``int`` and decimal literals ``Decimal`` so no precision is lost before the
encoder sees them.
"""

from __future__ import annotations

import json
import re
from decimal import Decimal
from typing import Any

from abi_forms.core.encoder import encode_call
from abi_forms.core.errors import EncodingError, SignatureParseError
from abi_forms.core.signature.function_signature import (
    normalize_signature,
    parse_signature,
)

ADDRESS_LITERAL_RE = re.compile(r"0x[a-fA-F0-9]{40}")
INTEGER_LITERAL_RE = re.compile(r"-?\d+")
DECIMAL_LITERAL_RE = re.compile(r"-?\d+\.\d+")

# 2**256 has 78 decimal digits
MAX_INTEGER_DIGITS = 78


def split_arguments(text: str) -> list[str]:
    """Split on top-level commas; commas in tuples, arrays and strings are kept."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    in_string = False
    for ch in text:
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch in "([":
                depth += 1
            elif ch in ")]":
                depth -= 1
            elif ch == "," and depth == 0:
                parts.append("".join(current).strip())
                current = []
                continue
        current.append(ch)

    tail = "".join(current).strip()
    if parts or tail:
        parts.append(tail)
    return parts


def _parse_integer(token: str) -> int:
    digits = token.lstrip("-").lstrip("0") or "0"
    if len(digits) > MAX_INTEGER_DIGITS:
        raise ValueError(f"Integer literal has more than 256 bits: {token[:16]}...")
    return -int(digits) if token.startswith("-") else int(digits)


def parse_literal(token: str) -> Any:
    token = token.strip()

    if token.startswith("(") and token.endswith(")"):
        return tuple(parse_arguments(token[1:-1]))

    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1]

    if token.startswith("[") and token.endswith("]"):
        inner = token[1:-1]
        if "(" not in inner and "[" not in inner:
            try:
                items = json.loads(token, parse_float=Decimal)
            except ValueError:
                items = None
            if isinstance(items, list):
                return items
        return parse_arguments(inner)

    if ADDRESS_LITERAL_RE.fullmatch(token):
        return token
    if token in ("true", "false"):
        return token == "true"
    if INTEGER_LITERAL_RE.fullmatch(token):
        return _parse_integer(token)
    if DECIMAL_LITERAL_RE.fullmatch(token):
        return Decimal(token)
    return token


def parse_arguments(text: str) -> list[Any]:
    return [parse_literal(token) for token in split_arguments(text)]


def build_calldata(signature: str, value_preview: str) -> str:
    """Encode a call from its signature and value preview.

    Raises ``EncodingError`` carrying the underlying parser or encoder
    message when the call cannot be encoded.
    """
    try:
        descriptor = parse_signature(normalize_signature(signature))
    except SignatureParseError as exc:
        raise EncodingError(f"Failed to generate calldata: {exc}", cause=exc) from exc

    try:
        args = parse_arguments(value_preview)
    except ValueError as exc:
        raise EncodingError(f"Failed to generate calldata: {exc}", cause=exc) from exc

    try:
        return encode_call(descriptor, args)
    except EncodingError as exc:
        raise EncodingError(
            f"Failed to generate calldata: {exc}", cause=exc.cause or exc
        ) from exc
