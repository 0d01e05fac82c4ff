"""
Network configuration.

Known Klever networks and an offline client that only answers chain id
lookups for the builder.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .constants import KLV_ASSET_ID, KLV_PRECISION
from .runtime.errors import ClientRequiredError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Network:
    """Static description of one Klever network."""

    name: str
    chain_id: str
    api: str
    node: str
    explorer: str
    is_testnet: bool = True
    native_symbol: str = KLV_ASSET_ID
    decimals: int = KLV_PRECISION


NETWORKS: Mapping[str, Network] = MappingProxyType({
    "mainnet": Network(
        name="mainnet",
        chain_id="108",
        api="https://api.mainnet.klever.org",
        node="https://node.mainnet.klever.org",
        explorer="https://kleverscan.org",
        is_testnet=False,
    ),
    "testnet": Network(
        name="testnet",
        chain_id="109",
        api="https://api.testnet.klever.org",
        node="https://node.testnet.klever.org",
        explorer="https://testnet.kleverscan.org",
    ),
    "devnet": Network(
        name="devnet",
        chain_id="10001",
        api="https://api.devnet.klever.org",
        node="https://node.devnet.klever.org",
        explorer="https://devnet.kleverscan.org",
    ),
    "local": Network(
        name="local",
        chain_id="420420",
        api="http://localhost:8080",
        node="http://localhost:8080",
        explorer="http://localhost:3000",
    ),
})


def get_network(name: str) -> Network:
    """
    Look up a known network by name.

    Raises:
        ValidationError: If the name is unknown
    """
    try:
        return NETWORKS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown network: {name!r}",
            ErrorCode.INVALID_PARAMETER,
            {"network": name, "known": sorted(NETWORKS)},
        )


class StaticNetworkClient:
    """
    Offline network client.

    Supplies the chain id for ``build_proto``; node-assisted building is not
    available.
    """

    def __init__(self, network: Any = "mainnet"):
        self.network = get_network(network) if isinstance(network, str) else network

    def get_network(self) -> Network:
        return self.network

    async def build_transaction(self, request: Dict[str, Any]) -> Dict[str, Any]:
        raise ClientRequiredError(
            "Node-assisted building requires a connected network client",
            {"network": getattr(self.network, "name", None)},
        )

    def __repr__(self) -> str:
        return f"StaticNetworkClient(network={getattr(self.network, 'name', self.network)!r})"


__all__ = ["Network", "NETWORKS", "get_network", "StaticNetworkClient"]
