"""
Cryptographic primitives for Klever accounts.
"""

from .ed25519 import Ed25519Error, Ed25519PrivateKey, Ed25519PublicKey, coerce_private_key

__all__ = ["Ed25519Error", "Ed25519PrivateKey", "Ed25519PublicKey", "coerce_private_key"]
