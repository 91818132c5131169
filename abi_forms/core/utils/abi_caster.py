"""Casting of parsed preview literals to the values ``eth_abi`` encodes.

Literals arrive as produced by the call assembler: ``int``/``Decimal`` for
numbers, ``bool``, ``str`` for addresses, hex and strings, lists for arrays and
tuples for tuple literals. Casting walks the ``ParameterNode`` tree in step
with the literal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from web3 import Web3

from abi_forms.core.signature.type_signature import member_keys
from abi_forms.core.types import ParameterNode


def _to_int(value: Any, type_str: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"Expected integer for {type_str}, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if value != value.to_integral_value():
            raise ValueError(f"Expected integer for {type_str}, got {value}")
        return int(value)
    text = str(value).strip()
    return int(text, 16) if text.lower().startswith("0x") else int(text)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise TypeError(f"Expected bool, got {value!r}")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    text = str(value)
    if text.startswith("0x"):
        return bytes.fromhex(text[2:])
    return text.encode("utf-8")


def cast_single(value: Any, type_str: str) -> Any:
    """Cast one leaf literal; unknown types are passed through unchanged."""
    type_str = type_str.strip()
    if type_str == "bool":
        return _to_bool(value)
    if type_str.startswith(("uint", "int")):
        return _to_int(value, type_str)
    if type_str == "address":
        return Web3.to_checksum_address(str(value))
    if type_str == "string":
        return str(value)
    if type_str.startswith("bytes"):
        return _to_bytes(value)
    return value


def cast_args(args: list[Any], inputs: tuple[ParameterNode, ...]) -> list[Any]:
    """Cast positional literals against ``inputs``, recursing into arrays and tuples."""
    if len(args) != len(inputs):
        raise ValueError(
            f"Argument count mismatch: got {len(args)}, expected {len(inputs)}"
        )
    return [_cast_node(value, node) for value, node in zip(args, inputs, strict=True)]


def _element_node(node: ParameterNode) -> ParameterNode:
    type_str = node.type.strip()
    return ParameterNode(
        type=type_str[: type_str.rindex("[")],
        name=node.name,
        components=node.components,
    )


def _cast_members(value: Any, node: ParameterNode) -> tuple[Any, ...]:
    components = node.components or ()
    if isinstance(value, dict):
        # Member keys first, positional keys ("0", "1", ...) as a fallback
        keys = member_keys([c.name for c in components])
        value = [value.get(key, value.get(str(i))) for i, key in enumerate(keys)]
    if not isinstance(value, (list, tuple)):
        raise TypeError(
            f"Expected tuple literal for {node.name or 'tuple'}, "
            f"got {type(value).__name__}"
        )
    return tuple(cast_args(list(value), components))


def _cast_node(value: Any, node: ParameterNode) -> Any:
    if node.type.strip().endswith("]"):
        if not isinstance(value, (list, tuple)):
            raise TypeError(
                f"Expected list for {node.type}, got {type(value).__name__}"
            )
        element = _element_node(node)
        return [_cast_node(item, element) for item in value]

    if node.is_tuple and node.components:
        return _cast_members(value, node)

    return cast_single(value, node.type)
