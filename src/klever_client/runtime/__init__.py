"""Runtime helpers for the Klever transaction library"""

from .errors import (
    ErrorCode,
    KleverError,
    ValidationError,
    InvalidAddressError,
    InvalidAmountError,
    BuildError,
    MissingChainIdError,
    ClientRequiredError,
    UnsupportedOperationError,
    TransactionError,
    EncodingError,
    MarshalError,
    UnmarshalError,
    error_from_response,
)
from .address import AddressCodec, KleverAddress, decode_address, encode_address, is_valid_address

__all__ = [
    "ErrorCode",
    "KleverError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "BuildError",
    "MissingChainIdError",
    "ClientRequiredError",
    "UnsupportedOperationError",
    "TransactionError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    "error_from_response",
    "AddressCodec",
    "KleverAddress",
    "decode_address",
    "encode_address",
    "is_valid_address",
]
