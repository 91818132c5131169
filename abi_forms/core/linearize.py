"""Flatten a function's parameter tree into renderable rows.

Every top-level input becomes exactly one ``LinearizedParameter``. Tuple
inputs are not split into sibling rows; their ``type`` is rewritten to the
expanded literal signature (``tuple`` -> ``(uint256 a, address b)``) so the
structure can be recovered later with ``parse_type_signature``.
"""

from __future__ import annotations

from abi_forms.core.signature.type_signature import (
    member_keys,
    parse_type_signature,
    strip_tuple_suffix,
)
from abi_forms.core.types import FunctionDescriptor, LinearizedParameter, ParameterNode


def expand_tuple_type(node: ParameterNode) -> str:
    if not node.is_tuple or not node.components:
        return node.type

    inner = ", ".join(
        f"{expand_tuple_type(c)} {c.name}".strip() for c in node.components
    )
    return f"({inner}){node.array_suffix}"


def linearize(descriptor: FunctionDescriptor) -> list[LinearizedParameter]:
    keys = member_keys([node.name for node in descriptor.inputs])
    return [
        LinearizedParameter(type=expand_tuple_type(node), name=key, depth=0, path="")
        for node, key in zip(descriptor.inputs, keys, strict=True)
    ]


def linearize_components(param: LinearizedParameter) -> list[LinearizedParameter]:
    """Rows for the members of a tuple row, one level deeper.

    Used to render a tuple (or one element of a tuple array) as a nested form.
    Row names are the keys the tuple's stored JSON object is expected to use.
    Returns ``[]`` for non-tuple rows.
    """
    tuple_part, _ = strip_tuple_suffix(param.type)
    fields = parse_type_signature(tuple_part)
    keys = member_keys([f.name for f in fields])
    prefix = f"{param.path}{param.name}."
    return [
        LinearizedParameter(
            type=field.type, name=key, depth=param.depth + 1, path=prefix
        )
        for field, key in zip(fields, keys, strict=True)
    ]


def display_signature(descriptor: FunctionDescriptor) -> str:
    """``transfer(address to, uint256 amount)`` with tuples written out in full."""
    params = ", ".join(
        f"{expand_tuple_type(node)} {node.name}".strip() for node in descriptor.inputs
    )
    return f"{descriptor.name}({params})"
