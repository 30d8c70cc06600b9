"""
ecverify Exceptions.

All errors inherit from ECVerifyError for easy catching. An error means the
signature could not be checked at all; a checked-and-rejected signature is
never reported through an exception.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Kinds of failure that prevent a verification from completing."""

    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"
    KEY_IMPORT_FAILED = "KEY_IMPORT_FAILED"
    UNSUPPORTED_KEY_TYPE = "UNSUPPORTED_KEY_TYPE"
    DIGEST_COMPUTATION_FAILED = "DIGEST_COMPUTATION_FAILED"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"


class ECVerifyError(Exception):
    """
    Base exception for all ecverify errors.

    Raise a subclass; each one sets its kind. The base class has no kind and
    reports the generic ECVERIFY_ERROR code.
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    @property
    def code(self) -> str:
        return self.kind.value if self.kind is not None else "ECVERIFY_ERROR"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


class MalformedSignatureError(ECVerifyError):
    """Raw signature has the wrong size or its DER form is invalid."""

    kind = ErrorKind.MALFORMED_SIGNATURE

    def __init__(self, message: str, length: Optional[int] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.length = length
        if length is not None:
            self.details.setdefault("length", length)


class KeyImportError(ECVerifyError):
    """Public key container could not be parsed."""

    kind = ErrorKind.KEY_IMPORT_FAILED


class UnsupportedKeyTypeError(ECVerifyError):
    """Public key parsed but is not a usable elliptic-curve key."""

    kind = ErrorKind.UNSUPPORTED_KEY_TYPE

    def __init__(self, message: str, key_type: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.key_type = key_type
        if key_type is not None:
            self.details.setdefault("key_type", key_type)


class UnsupportedCurveError(UnsupportedKeyTypeError):
    """Elliptic-curve key on a curve with no digest binding or not allowed."""

    def __init__(self, message: str, curve: Optional[str] = None, **kwargs: Any):
        super().__init__(message, key_type="EC", **kwargs)
        self.curve = curve
        if curve is not None:
            self.details.setdefault("curve", curve)


class DigestComputationError(ECVerifyError):
    """Digest primitive could not be initialised or updated."""

    kind = ErrorKind.DIGEST_COMPUTATION_FAILED


class ResourceExhaustedError(ECVerifyError):
    """Allocation failed while building the encoding or a crypto context."""

    kind = ErrorKind.RESOURCE_EXHAUSTED
