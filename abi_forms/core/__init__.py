from abi_forms.core.calldata import build_calldata
from abi_forms.core.encoder import encode_call
from abi_forms.core.errors import (
    AbiFormsError,
    EncodingError,
    FieldValidationError,
    FormatFallbackError,
    SignatureParseError,
)
from abi_forms.core.form import FormState, load_signature, update_field, update_fields
from abi_forms.core.linearize import linearize
from abi_forms.core.preview import format_tuple_with_structure, format_value
from abi_forms.core.signature import parse_signature, parse_type_signature
from abi_forms.core.types import (
    CallPreview,
    Field,
    FunctionDescriptor,
    LinearizedParameter,
    ParameterNode,
)
from abi_forms.core.validation import validate, validate_field

__all__ = [
    "AbiFormsError",
    "CallPreview",
    "EncodingError",
    "Field",
    "FieldValidationError",
    "FormState",
    "FormatFallbackError",
    "FunctionDescriptor",
    "LinearizedParameter",
    "ParameterNode",
    "SignatureParseError",
    "build_calldata",
    "encode_call",
    "format_tuple_with_structure",
    "format_value",
    "linearize",
    "load_signature",
    "parse_signature",
    "parse_type_signature",
    "update_field",
    "update_fields",
    "validate",
    "validate_field",
]
