"""Form state for calling one function.

A ``FormState`` is one immutable revision: the signature, its linearized
parameters, every field's current string, and everything derived from them.
Each edit produces a new revision through a full recompute; nothing derived
is ever patched in place.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from loguru import logger

from abi_forms.core.calldata import build_calldata
from abi_forms.core.config import get_recently_updated_seconds
from abi_forms.core.encoder import encode_call
from abi_forms.core.errors import EncodingError, SignatureParseError
from abi_forms.core.linearize import display_signature, linearize
from abi_forms.core.preview import format_preview
from abi_forms.core.signature.function_signature import parse_signature
from abi_forms.core.types import CallPreview, FunctionDescriptor, LinearizedParameter
from abi_forms.core.validation import validate_field
from abi_forms.core.values import to_wire


@dataclass(frozen=True)
class FormState:
    signature: str
    descriptor: FunctionDescriptor | None = None
    error: str = ""
    parameters: tuple[LinearizedParameter, ...] = ()
    values: Mapping[str, str] = field(default_factory=dict)
    validity: Mapping[str, bool] = field(default_factory=dict)
    errors: Mapping[str, str] = field(default_factory=dict)
    function_signature: str = ""
    value_preview: str = ""
    bytecode: str = ""
    is_valid: bool = False
    updated_at: float | None = None

    @property
    def parsed(self) -> bool:
        return self.descriptor is not None

    @property
    def preview(self) -> CallPreview:
        return CallPreview(
            function_signature=self.function_signature,
            value_preview=self.value_preview,
            bytecode=self.bytecode,
            is_valid=self.is_valid,
        )

    def is_recently_updated(self, now: float | None = None) -> bool:
        if self.updated_at is None:
            return False
        now = time.monotonic() if now is None else now
        return now - self.updated_at < get_recently_updated_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "error": self.error or None,
            "preview": self.preview.to_dict(),
            "parameters": [p.to_dict() for p in self.parameters],
            "values": dict(self.values),
            "validity": dict(self.validity),
            "errors": dict(self.errors),
        }


def _derive_calldata(
    descriptor: FunctionDescriptor,
    function_signature: str,
    value_preview: str,
) -> str:
    if not descriptor.inputs:
        return encode_call(descriptor, [])
    if not value_preview:
        return ""
    return build_calldata(function_signature, value_preview)


def recompute(state: FormState, *, now: float | None = None) -> FormState:
    """Derive validity, preview and calldata from the current values."""
    if state.descriptor is None:
        return state

    validity: dict[str, bool] = {}
    errors: dict[str, str] = {}
    for param in state.parameters:
        result = validate_field(state.values.get(param.name, ""), param.type)
        validity[param.name] = result.valid
        if result.error:
            errors[param.name] = result.error

    value_preview = format_preview(state.parameters, state.values)

    bytecode = ""
    if all(validity.values()) and state.function_signature:
        try:
            bytecode = _derive_calldata(
                state.descriptor, state.function_signature, value_preview
            )
        except EncodingError as exc:
            logger.debug(f"No calldata for {state.function_signature}: {exc}")

    return replace(
        state,
        validity=validity,
        errors=errors,
        value_preview=value_preview,
        bytecode=bytecode,
        is_valid=bool(bytecode),
        updated_at=time.monotonic() if now is None else now,
    )


def load_signature(signature: str) -> FormState:
    """Start a fresh form for ``signature``; parse failures end up in ``error``."""
    try:
        descriptor = parse_signature(signature)
    except SignatureParseError as exc:
        logger.warning(f"Signature rejected: {exc}")
        return FormState(signature=signature, error=str(exc))

    parameters = tuple(linearize(descriptor))
    state = FormState(
        signature=signature,
        descriptor=descriptor,
        parameters=parameters,
        values={p.name: "" for p in parameters},
        function_signature=display_signature(descriptor),
    )
    return recompute(state)


def update_fields(state: FormState, changes: Mapping[str, Any]) -> FormState:
    """New revision with ``changes`` applied; values may be str, list or dict."""
    unknown = [name for name in changes if name not in state.values]
    if unknown:
        raise KeyError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")

    values = dict(state.values)
    for name, value in changes.items():
        values[name] = to_wire(value)
    return recompute(replace(state, values=values))


def update_field(state: FormState, name: str, value: Any) -> FormState:
    return update_fields(state, {name: value})
