"""
Klever Error Model

This module provides the error handling framework for the Klever transaction
library. Every error carries a stable, machine-checkable code plus a message
and structured details; callers branch on ``code``, not on message text.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INVALID_HEX = 101
    INVALID_BASE64 = 102
    MARSHAL_ERROR = 103
    UNMARSHAL_ERROR = 104

    # Construction errors (200-299)
    BUILD_ERROR = 200
    MISSING_CHAIN_ID = 201
    CLIENT_REQUIRED = 202
    UNSUPPORTED_OPERATION = 203

    # Transaction state errors (400-499)
    TRANSACTION_ERROR = 400
    MISSING_RAW_DATA = 401
    NODE_ERROR = 402

    # Validation errors (500-599)
    VALIDATION_ERROR = 500
    INVALID_ADDRESS = 501
    INVALID_AMOUNT = 502
    INVALID_PARAMETER = 503
    MISSING_FIELD = 504
    MISSING_OPERATIONS = 505
    MISSING_SENDER = 506
    MISSING_NONCE = 507


class KleverError(Exception):
    """
    Base class for all Klever errors.

    Provides structured error information: a code, a message, details and an
    optional underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Klever error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "kind": self.code.name,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KleverError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class ValidationError(KleverError, ValueError):
    """Malformed or missing input, detected before any encoding or I/O."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidAddressError(ValidationError):
    """Address cannot be decoded to raw account bytes."""

    def __init__(self, message: str = "Invalid address",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ADDRESS, details, cause)


class InvalidAmountError(ValidationError):
    """Amount is non-positive, negative, fractional or not a number."""

    def __init__(self, message: str = "Invalid amount",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_AMOUNT, details, cause)


class BuildError(KleverError):
    """Transaction cannot be constructed from the current builder state."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.BUILD_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MissingChainIdError(BuildError):
    """No chain id in overrides, builder state or client network."""

    def __init__(self, message: str = "Chain ID is required",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_CHAIN_ID, details, cause)


class ClientRequiredError(BuildError):
    """Node-assisted building requested without a network client."""

    def __init__(self, message: str = "Network client required",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CLIENT_REQUIRED, details, cause)


class UnsupportedOperationError(BuildError):
    """Operation has no wire schema and cannot be encoded offline."""

    def __init__(self, message: str = "Unsupported operation",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_OPERATION, details, cause)


class TransactionError(KleverError):
    """Transaction state errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.TRANSACTION_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class EncodingError(KleverError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MarshalError(EncodingError):
    """Data marshaling error."""

    def __init__(self, message: str = "Marshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MARSHAL_ERROR, details, cause)


class UnmarshalError(EncodingError):
    """Data unmarshaling error."""

    def __init__(self, message: str = "Unmarshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause)


def error_from_response(response: Dict[str, Any]) -> Optional[KleverError]:
    """
    Create an appropriate error from a node response.

    Args:
        response: Node response that may contain error information

    Returns:
        TransactionError instance or None if no error
    """
    error_data = response.get("error")
    if not error_data:
        return None

    if isinstance(error_data, str):
        return TransactionError(error_data, ErrorCode.NODE_ERROR, {"error": error_data})

    if not isinstance(error_data, dict):
        return TransactionError(str(error_data), ErrorCode.NODE_ERROR)

    message = error_data.get("message", "Unknown node error")
    return TransactionError(message, ErrorCode.NODE_ERROR, dict(error_data))


__all__ = [
    "ErrorCode",
    "KleverError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "BuildError",
    "MissingChainIdError",
    "ClientRequiredError",
    "UnsupportedOperationError",
    "TransactionError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    "error_from_response",
]
