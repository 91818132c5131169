__version__ = "0.1.0"

from abi_forms.core import (
    CallPreview,
    FormState,
    build_calldata,
    linearize,
    load_signature,
    parse_signature,
    parse_type_signature,
    update_field,
    update_fields,
    validate,
)

__all__ = [
    "__version__",
    "CallPreview",
    "FormState",
    "build_calldata",
    "linearize",
    "load_signature",
    "parse_signature",
    "parse_type_signature",
    "update_field",
    "update_fields",
    "validate",
]
