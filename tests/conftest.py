"""
Shared fixtures: deterministic keys and addresses, builders and fake clients.
"""

import pytest

from klever_client.config import StaticNetworkClient
from klever_client.crypto.ed25519 import Ed25519PrivateKey
from klever_client.runtime.address import encode_address
from klever_client.tx.builder import TransactionBuilder


class FakeNetworkClient:
    """Network client double that records build requests."""

    def __init__(self, response=None, network=None):
        self.response = response if response is not None else {"result": {}}
        self.network = network if network is not None else {"chainId": "109"}
        self.requests = []

    def get_network(self):
        return self.network

    async def build_transaction(self, request):
        self.requests.append(request)
        return self.response


class FakeSigner:
    """Signer double returning a fixed 64-byte signature."""

    def __init__(self, fill: int = 0xAB, wrap: str = None):
        self.fill = fill
        self.wrap = wrap
        self.calls = []

    async def sign_message(self, hash_bytes, private_key):
        self.calls.append((hash_bytes, private_key))
        sig = bytes([self.fill]) * 64
        if self.wrap == "mapping":
            return {"bytes": sig}
        return sig


@pytest.fixture
def private_key():
    """Deterministic Ed25519 key."""
    return Ed25519PrivateKey.from_seed(b"klever test seed")


@pytest.fixture
def sender(private_key):
    """Address of the deterministic key."""
    return private_key.public_key().to_address()


@pytest.fixture
def receiver():
    return encode_address(bytes(range(32)))


@pytest.fixture
def other_address():
    return encode_address(bytes([7]) * 32)


@pytest.fixture
def fake_client():
    return FakeNetworkClient()


@pytest.fixture
def fake_signer():
    return FakeSigner()


@pytest.fixture
def static_client():
    return StaticNetworkClient("testnet")


@pytest.fixture
def transfer_builder(sender, receiver):
    """Builder with one KLV transfer, sender, nonce and chain id set."""
    return (
        TransactionBuilder()
        .set_chain_id("108")
        .set_sender(sender)
        .set_nonce(1)
        .add_transfer(receiver=receiver, amount=1_000_000)
    )


@pytest.fixture
def client_factory():
    """Build a FakeNetworkClient with a chosen response or network."""
    return FakeNetworkClient


@pytest.fixture
def signer_factory():
    return FakeSigner
