from __future__ import annotations


class AbiFormsError(Exception):
    pass


class SignatureParseError(AbiFormsError, ValueError):
    """Malformed signature, or one that does not describe a function."""

    def __init__(self, message: str, signature: str | None = None):
        self.signature = signature
        super().__init__(message)


class FieldValidationError(AbiFormsError, ValueError):
    def __init__(self, type_str: str, reason: str):
        self.type_str = type_str
        self.reason = reason
        super().__init__(reason)


class FormatFallbackError(AbiFormsError):
    """Structured preview formatting failed; callers fall back to heuristics."""


class EncodingError(AbiFormsError, ValueError):
    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
