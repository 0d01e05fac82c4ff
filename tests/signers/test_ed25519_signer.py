"""
Signer tests.
"""

import pytest

from klever_client.signers.ed25519 import DEFAULT_SIGNER, Ed25519Signer
from klever_client.signers.signer import Signer, SignerError, signature_bytes

HASH = bytes(range(32))


@pytest.mark.unit
class TestEd25519Signer:
    """Test the default signer."""

    @pytest.mark.asyncio
    async def test_sign_with_key_argument(self, private_key):
        sig = await DEFAULT_SIGNER.sign_message(HASH, private_key)
        assert len(sig) == 64
        assert private_key.public_key().verify(sig, HASH)

    @pytest.mark.asyncio
    async def test_sign_with_raw_and_hex_keys(self, private_key):
        raw = await Ed25519Signer().sign_message(HASH, private_key.to_bytes())
        hexed = await Ed25519Signer().sign_message(HASH, private_key.to_bytes().hex())
        assert raw == hexed == private_key.sign(HASH)

    @pytest.mark.asyncio
    async def test_bound_key(self, private_key):
        signer = Ed25519Signer(private_key)
        assert signer.get_public_key() == private_key.public_key().to_bytes()
        assert await signer.sign_message(HASH) == private_key.sign(HASH)

    @pytest.mark.asyncio
    async def test_no_key(self):
        with pytest.raises(SignerError):
            await Ed25519Signer().sign_message(HASH)

    def test_is_signer(self):
        assert isinstance(DEFAULT_SIGNER, Signer)
        assert Ed25519Signer().get_public_key() is None
        assert repr(Ed25519Signer()) == "Ed25519Signer(unbound)"


class _Wrapped:
    def __init__(self, value):
        self.bytes = value


@pytest.mark.unit
class TestSignatureBytes:
    """Test normalization of signer results."""

    @pytest.mark.parametrize("value", [
        b"\x01" * 64,
        bytearray(b"\x01" * 64),
        {"bytes": b"\x01" * 64},
        _Wrapped(b"\x01" * 64),
    ])
    def test_accepted(self, value):
        assert signature_bytes(value) == b"\x01" * 64

    @pytest.mark.parametrize("value", [None, "abc", 42, {"sig": b""}])
    def test_rejected(self, value):
        with pytest.raises(SignerError):
            signature_bytes(value)
