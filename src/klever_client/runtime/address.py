"""
Bech32 account addresses for Klever (klv1...).

Provides the address codec (human-readable <-> 32 raw bytes) and a Pydantic
custom type that validates addresses on model construction.
"""

from typing import Any, Union

from bech32 import bech32_decode, bech32_encode, convertbits
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..constants import ADDRESS_LENGTH, ADDRESS_PREFIX
from .errors import InvalidAddressError


def decode_address(address: str, prefix: str = ADDRESS_PREFIX) -> bytes:
    """
    Decode a bech32 address to its raw account bytes.

    Args:
        address: Human-readable address (klv1...)
        prefix: Expected human-readable part

    Returns:
        32 raw address bytes

    Raises:
        InvalidAddressError: If the address is malformed, has the wrong prefix
            or does not decode to exactly 32 bytes
    """
    if not isinstance(address, str) or not address:
        raise InvalidAddressError(f"Invalid address: {address!r}", {"address": address})

    hrp, words = bech32_decode(address)
    if hrp is None or words is None:
        raise InvalidAddressError(f"Invalid address: {address}", {"address": address})
    if hrp != prefix:
        raise InvalidAddressError(
            f"Invalid address prefix: expected '{prefix}', got '{hrp}'",
            {"address": address, "prefix": hrp},
        )

    data = convertbits(words, 5, 8, False)
    if data is None or len(data) != ADDRESS_LENGTH:
        got = None if data is None else len(data)
        raise InvalidAddressError(
            f"Invalid address length: expected {ADDRESS_LENGTH}, got {got}",
            {"address": address, "length": got},
        )
    return bytes(data)


def encode_address(raw: Union[bytes, bytearray], prefix: str = ADDRESS_PREFIX) -> str:
    """
    Encode 32 raw account bytes as a bech32 address.

    Raises:
        InvalidAddressError: If ``raw`` is not exactly 32 bytes
    """
    if len(raw) != ADDRESS_LENGTH:
        raise InvalidAddressError(
            f"Invalid address length: expected {ADDRESS_LENGTH}, got {len(raw)}",
            {"length": len(raw)},
        )
    words = convertbits(bytes(raw), 8, 5, True)
    return bech32_encode(prefix, words)


def is_valid_address(address: Any, prefix: str = ADDRESS_PREFIX) -> bool:
    """Check whether ``address`` decodes to a 32-byte account."""
    try:
        decode_address(address, prefix)
    except InvalidAddressError:
        return False
    return True


class AddressCodec:
    """Address codec bound to one human-readable prefix."""

    def __init__(self, prefix: str = ADDRESS_PREFIX):
        self.prefix = prefix

    def decode(self, address: str) -> bytes:
        return decode_address(address, self.prefix)

    def encode(self, raw: bytes) -> str:
        return encode_address(raw, self.prefix)

    def is_valid(self, address: str) -> bool:
        return is_valid_address(address, self.prefix)

    def __repr__(self) -> str:
        return f"AddressCodec(prefix='{self.prefix}')"


class KleverAddress(str):
    """Custom Pydantic type for bech32 Klever addresses."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the address."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def _validate(cls, value: Any) -> "KleverAddress":
        if isinstance(value, cls):
            return value
        decode_address(value)
        return cls(value)

    @property
    def raw(self) -> bytes:
        """The 32 raw account bytes."""
        return decode_address(self)


__all__ = [
    "AddressCodec",
    "KleverAddress",
    "decode_address",
    "encode_address",
    "is_valid_address",
]
