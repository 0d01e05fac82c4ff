"""
ED25519 signer implementation.

Default signer used by ``Transaction.sign`` when none is given.
"""

import logging
from typing import Optional, Union

from ..crypto.ed25519 import Ed25519PrivateKey, coerce_private_key
from .signer import Signer, SignerError

logger = logging.getLogger(__name__)


class Ed25519Signer(Signer):
    """
    ED25519 signer.

    Optionally bound to a private key, used when ``sign_message`` is called
    without one.
    """

    def __init__(self, private_key: Optional[Union[Ed25519PrivateKey, bytes, str]] = None):
        self._private_key = coerce_private_key(private_key) if private_key is not None else None

    def get_public_key(self) -> Optional[bytes]:
        """Public key bytes of the bound key, if any."""
        if self._private_key is None:
            return None
        return self._private_key.public_key().to_bytes()

    async def sign_message(self, hash_bytes: bytes, private_key=None) -> bytes:
        """
        Sign a transaction hash.

        Args:
            hash_bytes: 32-byte transaction hash
            private_key: Ed25519PrivateKey, 32 raw bytes or hex; falls back to
                the bound key

        Returns:
            64-byte signature
        """
        key = coerce_private_key(private_key) if private_key is not None else self._private_key
        if key is None:
            raise SignerError("No private key given and none bound to the signer")
        signature = key.sign(hash_bytes)
        logger.debug("Signed %d-byte hash", len(hash_bytes))
        return signature

    def __repr__(self) -> str:
        bound = "bound" if self._private_key is not None else "unbound"
        return f"Ed25519Signer({bound})"


DEFAULT_SIGNER = Ed25519Signer()


__all__ = ["Ed25519Signer", "DEFAULT_SIGNER"]
