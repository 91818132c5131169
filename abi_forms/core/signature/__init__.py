from abi_forms.core.signature.function_signature import (
    normalize_signature,
    parse_signature,
)
from abi_forms.core.signature.type_signature import (
    parse_type_and_name,
    parse_type_signature,
)

__all__ = [
    "normalize_signature",
    "parse_signature",
    "parse_type_and_name",
    "parse_type_signature",
]
