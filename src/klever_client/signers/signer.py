"""
Base signer interface for Klever transactions.

A signer turns a 32-byte transaction hash plus a private key into signature
bytes. Signing is a coroutine so that remote signers (wallet extensions,
hardware devices, key services) fit the same seam.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from ..runtime.errors import ErrorCode, KleverError


class SignerError(KleverError):
    """Signer returned something that is not a signature."""

    def __init__(self, message: str, details=None, cause=None):
        super().__init__(message, ErrorCode.INVALID_PARAMETER, details, cause)


class Signer(ABC):
    """
    Base signer interface.

    Implementations must not log or retain the private key.
    """

    @abstractmethod
    async def sign_message(self, hash_bytes: bytes, private_key: Any) -> Any:
        """
        Sign a transaction hash.

        Args:
            hash_bytes: 32-byte BLAKE2b hash of the raw transaction data
            private_key: Key material understood by the implementation

        Returns:
            Signature bytes, or an object/mapping exposing them as ``bytes``
        """


def signature_bytes(signature: Any) -> bytes:
    """
    Normalize a signer result to raw bytes.

    Accepts bytes-like values, mappings with a ``"bytes"`` key and objects
    with a ``bytes`` attribute.

    Raises:
        SignerError: If no signature bytes can be extracted
    """
    if isinstance(signature, (bytes, bytearray, memoryview)):
        return bytes(signature)
    if isinstance(signature, Mapping) and "bytes" in signature:
        return signature_bytes(signature["bytes"])
    inner = getattr(signature, "bytes", None)
    if isinstance(inner, (bytes, bytearray, memoryview)):
        return bytes(inner)
    raise SignerError(
        f"Signer returned unsupported signature type: {type(signature).__name__}",
        {"type": type(signature).__name__},
    )


__all__ = ["Signer", "SignerError", "signature_bytes"]
