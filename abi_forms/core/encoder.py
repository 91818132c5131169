from __future__ import annotations

from typing import Any

from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import keccak

from abi_forms.core.errors import EncodingError
from abi_forms.core.types import FunctionDescriptor
from abi_forms.core.utils.abi_caster import cast_args


def function_selector(descriptor: FunctionDescriptor) -> bytes:
    return keccak(text=descriptor.selector_signature)[:4]


def encode_call(descriptor: FunctionDescriptor, args: list[Any]) -> str:
    """Selector + ABI-encoded arguments as a ``0x`` hex string."""
    try:
        values = cast_args(list(args), descriptor.inputs)
        types = [node.canonical_type() for node in descriptor.inputs]
        data = function_selector(descriptor) + encode(types, values)
    except (AbiEncodingError, ValueError, TypeError, OverflowError) as exc:
        raise EncodingError(
            f"Failed to encode {descriptor.name}: {exc}", cause=exc
        ) from exc
    return "0x" + data.hex()
