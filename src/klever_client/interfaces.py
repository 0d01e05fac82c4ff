"""
Collaborator interfaces.

Structural types for the parts the transaction core consumes but does not
implement: the node client, the signer, the address codec and the hasher.
"""

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class NetworkClient(Protocol):
    """Node client used by ``TransactionBuilder.build`` and chain id lookup."""

    def get_network(self) -> Any:
        """Network with a ``chain_id`` attribute (or ``chainId``/``chain_id`` key)."""
        ...

    async def build_transaction(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the node to build a transaction; returns ``{"result": ...}``."""
        ...


@runtime_checkable
class Signer(Protocol):
    async def sign_message(self, hash_bytes: bytes, private_key: Any) -> Any:
        ...


@runtime_checkable
class AddressCodec(Protocol):
    def decode(self, address: str) -> bytes:
        ...

    def encode(self, raw: bytes) -> str:
        ...

    def is_valid(self, address: str) -> bool:
        ...


@runtime_checkable
class Hasher(Protocol):
    def digest(self, data: bytes, output_length: int = 32) -> bytes:
        ...


__all__ = ["NetworkClient", "Signer", "AddressCodec", "Hasher"]
