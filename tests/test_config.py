"""
Network configuration and collaborator interface tests.
"""

import pytest

from klever_client.codec.hashes import DEFAULT_HASHER
from klever_client.config import NETWORKS, Network, StaticNetworkClient, get_network
from klever_client.interfaces import AddressCodec, Hasher, NetworkClient, Signer
from klever_client.runtime.address import AddressCodec as Bech32Codec
from klever_client.runtime.errors import ClientRequiredError, ErrorCode, ValidationError
from klever_client.signers.ed25519 import DEFAULT_SIGNER


@pytest.mark.unit
class TestNetworks:
    """Test known network lookup."""

    @pytest.mark.parametrize("name,chain_id,is_testnet", [
        ("mainnet", "108", False),
        ("testnet", "109", True),
        ("devnet", "10001", True),
        ("local", "420420", True),
    ])
    def test_known(self, name, chain_id, is_testnet):
        network = get_network(name)
        assert network.name == name
        assert network.chain_id == chain_id
        assert network.is_testnet is is_testnet
        assert network.native_symbol == "KLV"

    def test_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            get_network("moonnet")
        assert exc_info.value.code == ErrorCode.INVALID_PARAMETER
        assert exc_info.value.details["known"] == sorted(NETWORKS)

    def test_read_only(self):
        with pytest.raises(TypeError):
            NETWORKS["custom"] = get_network("local")


@pytest.mark.unit
class TestStaticNetworkClient:
    """Test the offline client."""

    def test_default_mainnet(self):
        assert StaticNetworkClient().get_network().chain_id == "108"

    def test_custom_network(self):
        network = Network(name="private", chain_id="7", api="", node="", explorer="")
        assert StaticNetworkClient(network).get_network() is network

    @pytest.mark.asyncio
    async def test_build_transaction_unavailable(self, static_client):
        with pytest.raises(ClientRequiredError):
            await static_client.build_transaction({"contracts": []})


@pytest.mark.unit
class TestInterfaces:
    """Test that built-in collaborators satisfy the protocols."""

    def test_conformance(self, fake_client):
        assert isinstance(StaticNetworkClient(), NetworkClient)
        assert isinstance(fake_client, NetworkClient)
        assert isinstance(DEFAULT_SIGNER, Signer)
        assert isinstance(Bech32Codec(), AddressCodec)
        assert isinstance(DEFAULT_HASHER, Hasher)
