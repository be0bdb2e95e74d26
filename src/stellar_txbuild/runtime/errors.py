"""
Transaction build error model.

Every failure raised while compiling a draft, encoding it to XDR or deriving
its hash is a ``TxBuildError``. Errors are local and recoverable; callers
surface ``message`` verbatim next to the offending field (``details["field"]``)
when one is known.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable numeric codes for build errors."""

    UNKNOWN = 1

    # Field / value errors (100-199)
    INVALID_FIELD = 100
    MISSING_FIELD = 101
    INVALID_AMOUNT = 102
    INVALID_FRACTION = 103
    UNKNOWN_FLAG = 104
    INVALID_SIGNER_KEY = 105
    INVALID_ASSET = 106
    INVALID_PREDICATE = 107
    INVALID_STRKEY = 108

    # Draft / operation errors (200-299)
    INVALID_DRAFT = 200
    UNSUPPORTED_OPERATION = 201

    # Codec errors (300-399)
    DECODE_ERROR = 300
    ENCODE_FAILURE = 301
    HASH_FAILURE = 302


class TxBuildError(Exception):
    """
    Base class for all build errors.

    Carries a code, optional structured details and the underlying cause.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a build error.

        Args:
            message: Human readable message, shown verbatim to users
            code: Error code (defaults to the class default)
            details: Additional error details such as the offending field
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    @property
    def field(self) -> Optional[str]:
        """Name of the offending field, when known."""
        return self.details.get("field")

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidField(TxBuildError):
    """A parameter value could not be interpreted."""

    default_code = ErrorCode.INVALID_FIELD

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
        super().__init__(message, None, details, cause)


class MissingField(InvalidField):
    """A required parameter is absent."""

    default_code = ErrorCode.MISSING_FIELD

    def __init__(self, field: str, kind: Optional[str] = None):
        where = f" for {kind}" if kind else ""
        super().__init__(f"Missing required field '{field}'{where}", field=field,
                         details={"kind": kind} if kind else None)


class InvalidAmount(InvalidField):
    default_code = ErrorCode.INVALID_AMOUNT


class InvalidFraction(InvalidField):
    default_code = ErrorCode.INVALID_FRACTION


class UnknownFlag(InvalidField):
    default_code = ErrorCode.UNKNOWN_FLAG


class InvalidSignerKey(InvalidField):
    default_code = ErrorCode.INVALID_SIGNER_KEY


class InvalidAsset(InvalidField):
    default_code = ErrorCode.INVALID_ASSET


class InvalidPredicate(InvalidField):
    default_code = ErrorCode.INVALID_PREDICATE


class InvalidStrKey(InvalidField):
    default_code = ErrorCode.INVALID_STRKEY


class InvalidDraft(TxBuildError):
    """The draft as a whole cannot be compiled (e.g. no operations)."""

    default_code = ErrorCode.INVALID_DRAFT


class UnsupportedOperation(TxBuildError):
    """No builder exists for the requested operation kind."""

    default_code = ErrorCode.UNSUPPORTED_OPERATION

    def __init__(self, kind: Any, message: Optional[str] = None):
        super().__init__(message or f"Unsupported operation kind: {kind!r}",
                         details={"kind": str(kind)})
        self.kind = kind


class DecodeError(TxBuildError):
    """Raised by the binary codec for malformed JSON trees or XDR blobs."""

    default_code = ErrorCode.DECODE_ERROR


class EncodeFailure(TxBuildError):
    """The binary codec rejected the compiled envelope tree."""

    default_code = ErrorCode.ENCODE_FAILURE


class HashFailure(TxBuildError):
    """The transaction hash could not be derived from the encoded bytes."""

    default_code = ErrorCode.HASH_FAILURE


__all__ = [
    "ErrorCode",
    "TxBuildError",
    "InvalidField",
    "MissingField",
    "InvalidAmount",
    "InvalidFraction",
    "UnknownFlag",
    "InvalidSignerKey",
    "InvalidAsset",
    "InvalidPredicate",
    "InvalidStrKey",
    "InvalidDraft",
    "UnsupportedOperation",
    "DecodeError",
    "EncodeFailure",
    "HashFailure",
]
