"""Human-readable function signatures to ``FunctionDescriptor``.

Accepts the forms::

    function transfer(address to, uint256 amount)
    function swap((address tokenIn, uint24 fee) params, uint amountIn) external payable
    function balanceOf(address owner) view returns (uint256)
"""

from __future__ import annotations

import re

from eth_abi import is_encodable_type
from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import normalize, parse

from abi_forms.core.errors import SignatureParseError
from abi_forms.core.signature.type_signature import (
    TYPE_QUALIFIERS,
    parse_type_signature,
    strip_tuple_suffix,
)
from abi_forms.core.types import Field, FunctionDescriptor, ParameterNode

IDENTIFIER_RE = re.compile(r"^[a-zA-Z$_][a-zA-Z0-9$_]*$")
SIGNATURE_PREFIX_RE = re.compile(
    r"^(function|event|error|constructor|fallback|receive)\b"
)
FUNCTION_HEAD_RE = re.compile(r"^function\s+(?P<name>[a-zA-Z$_][a-zA-Z0-9$_]*)\s*\(")
FUNCTION_TAIL_RE = re.compile(
    r"""^
(\s+ (?P<scope>external|public) )?
(\s+ (?P<stateMutability>pure|view|nonpayable|payable) )?
(\s+ returns \s* (?P<returns>\(.*\)) )?
\s*$""",
    re.VERBOSE,
)

# ``indexed`` is only meaningful for events but is harmless to drop here.
_DROPPED_QUALIFIERS = {*TYPE_QUALIFIERS, "indexed"}


def normalize_signature(text: str) -> str:
    """Prefix a bare ``name(...)`` with ``function`` and collapse whitespace."""
    sig = " ".join(str(text).split())
    if sig and not SIGNATURE_PREFIX_RE.match(sig):
        sig = f"function {sig}"
    return sig


def _check_leaf_type(type_str: str, signature: str) -> str:
    canonical = normalize(type_str)
    try:
        parse(canonical).validate()
    except (ParseError, ABITypeError) as exc:
        raise SignatureParseError(
            f"Invalid parameter type '{type_str}': {exc}", signature
        ) from exc
    if not is_encodable_type(canonical):
        raise SignatureParseError(
            f"Unsupported parameter type '{type_str}'", signature
        )
    return canonical


def _to_parameter_node(item: Field, signature: str) -> ParameterNode:
    name_words = [w for w in item.name.split() if w not in _DROPPED_QUALIFIERS]
    name = name_words[-1] if name_words else ""
    if name and not IDENTIFIER_RE.match(name):
        raise SignatureParseError(f"Invalid parameter name '{name}'", signature)

    if item.type.startswith("("):
        tuple_part, suffix = strip_tuple_suffix(item.type)
        if not tuple_part.endswith(")"):
            raise SignatureParseError(
                f"Unbalanced parentheses in '{item.type}'", signature
            )
        fields = parse_type_signature(tuple_part)
        if not fields:
            raise SignatureParseError("Tuple types must have components", signature)
        if suffix:
            _check_leaf_type(f"uint256{suffix}", signature)
        return ParameterNode(
            type=f"tuple{suffix}",
            name=name,
            components=tuple(_to_parameter_node(f, signature) for f in fields),
        )

    type_words = [w for w in item.type.split() if w not in _DROPPED_QUALIFIERS]
    if len(type_words) != 1:
        raise SignatureParseError(f"Invalid parameter '{item.type}'", signature)
    return ParameterNode(type=_check_leaf_type(type_words[0], signature), name=name)


def parse_parameters(params: str, signature: str = "") -> tuple[ParameterNode, ...]:
    fields = parse_type_signature(f"({params.strip()})")
    return tuple(_to_parameter_node(f, signature or params) for f in fields)


def _closing_paren(text: str, start: int) -> int:
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_signature(text: str) -> FunctionDescriptor:
    """Parse a function signature or raise ``SignatureParseError``."""
    sig = " ".join(str(text or "").split())
    if not sig:
        raise SignatureParseError("ABI cannot be empty", sig)

    kind = SIGNATURE_PREFIX_RE.match(sig)
    if not kind:
        raise SignatureParseError(f"Unknown signature: {sig}", sig)
    if kind.group(1) != "function":
        raise SignatureParseError("ABI must be a function", sig)

    head = FUNCTION_HEAD_RE.match(sig)
    if not head:
        raise SignatureParseError(f"Invalid function signature: {sig}", sig)

    open_idx = head.end() - 1
    close_idx = _closing_paren(sig, open_idx)
    if close_idx == -1:
        raise SignatureParseError(f"Unbalanced parentheses in: {sig}", sig)

    tail = FUNCTION_TAIL_RE.match(sig[close_idx + 1 :])
    if not tail:
        raise SignatureParseError(
            f"Unexpected trailing text: {sig[close_idx + 1 :].strip()}", sig
        )

    outputs: tuple[ParameterNode, ...] = ()
    if tail.group("returns"):
        returns = tail.group("returns")
        if _closing_paren(returns, 0) != len(returns) - 1:
            raise SignatureParseError(f"Invalid returns clause: {returns}", sig)
        outputs = parse_parameters(returns[1:-1], sig)

    return FunctionDescriptor(
        name=head.group("name"),
        inputs=parse_parameters(sig[open_idx + 1 : close_idx], sig),
        outputs=outputs,
        state_mutability=tail.group("stateMutability") or "nonpayable",
    )
