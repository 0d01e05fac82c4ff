"""
Ed25519 key tests.
"""

import pytest

from klever_client.crypto.ed25519 import (
    Ed25519Error,
    Ed25519PrivateKey,
    Ed25519PublicKey,
    coerce_private_key,
)
from klever_client.runtime.address import decode_address

# RFC 8032 test vector 1
RFC_SECRET = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC_SIGNATURE = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


@pytest.mark.unit
class TestEd25519Keys:
    """Test key derivation, signing and verification."""

    def test_rfc8032_vector(self):
        key = Ed25519PrivateKey.from_hex(RFC_SECRET)
        assert key.public_key().to_hex() == RFC_PUBLIC
        assert key.sign(b"").hex() == RFC_SIGNATURE
        assert key.public_key().verify(bytes.fromhex(RFC_SIGNATURE), b"")

    def test_hex_prefix(self):
        assert Ed25519PrivateKey.from_hex("0x" + RFC_SECRET).to_bytes().hex() == RFC_SECRET

    def test_from_seed_is_deterministic(self):
        a = Ed25519PrivateKey.from_seed("seed")
        b = Ed25519PrivateKey.from_seed(b"seed")
        assert a.to_bytes() == b.to_bytes()
        assert a.public_key() == b.public_key()

    def test_verify_rejects_tampering(self, private_key):
        sig = private_key.sign(b"message")
        pub = private_key.public_key()
        assert pub.verify(sig, b"message")
        assert not pub.verify(sig, b"massage")
        assert not pub.verify(sig[:63], b"message")

    def test_address(self, private_key):
        pub = private_key.public_key()
        assert decode_address(pub.to_address()) == pub.to_bytes()

    def test_repr_hides_secret(self):
        key = Ed25519PrivateKey.from_hex(RFC_SECRET)
        assert RFC_SECRET not in repr(key)
        assert RFC_PUBLIC in repr(key)

    def test_generate(self):
        assert Ed25519PrivateKey.generate().to_bytes() != Ed25519PrivateKey.generate().to_bytes()

    @pytest.mark.parametrize("factory,value", [
        (Ed25519PrivateKey, b"\x01" * 31),
        (Ed25519PublicKey, b"\x01" * 33),
        (Ed25519PrivateKey.from_hex, "zz"),
        (Ed25519PublicKey.from_hex, "xyz"),
    ])
    def test_invalid_material(self, factory, value):
        with pytest.raises(Ed25519Error):
            factory(value)

    def test_public_key_hashable(self, private_key):
        pub = private_key.public_key()
        assert len({pub, Ed25519PublicKey(pub.to_bytes())}) == 1


@pytest.mark.unit
class TestCoercePrivateKey:
    """Test accepted private key forms."""

    def test_forms(self):
        key = Ed25519PrivateKey.from_hex(RFC_SECRET)
        assert coerce_private_key(key) is key
        assert coerce_private_key(RFC_SECRET).to_bytes() == key.to_bytes()
        assert coerce_private_key(bytes.fromhex(RFC_SECRET)).to_bytes() == key.to_bytes()

    def test_unsupported(self):
        with pytest.raises(Ed25519Error):
            coerce_private_key(12345)
