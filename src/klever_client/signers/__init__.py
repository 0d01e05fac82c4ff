"""
Transaction signers.
"""

from .ed25519 import DEFAULT_SIGNER, Ed25519Signer
from .signer import Signer, SignerError, signature_bytes

__all__ = ["Signer", "SignerError", "Ed25519Signer", "DEFAULT_SIGNER", "signature_bytes"]
