"""
Klever Transaction Library

Assembles, validates, canonically encodes, hashes and signs Klever
transactions before broadcast.
"""

import logging

# Errors and addresses
from .runtime.errors import *
from .runtime.address import AddressCodec, KleverAddress, decode_address, encode_address, is_valid_address

# Configuration
from .config import NETWORKS, Network, StaticNetworkClient, get_network
from .constants import ADDRESS_PREFIX, KLV_ASSET_ID, KFI_ASSET_ID, KLV_PRECISION

# Codec and hashing
from .codec import Blake2bHasher, TransactionCodec, blake2b_digest

# Keys and signing
from .crypto import Ed25519PrivateKey, Ed25519PublicKey
from .signers import DEFAULT_SIGNER, Ed25519Signer, Signer

# Transactions
from .tx import *

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Errors
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

    # Addresses
    "AddressCodec",
    "KleverAddress",
    "decode_address",
    "encode_address",
    "is_valid_address",

    # Configuration
    "Network",
    "NETWORKS",
    "get_network",
    "StaticNetworkClient",
    "ADDRESS_PREFIX",
    "KLV_ASSET_ID",
    "KFI_ASSET_ID",
    "KLV_PRECISION",

    # Codec
    "TransactionCodec",
    "Blake2bHasher",
    "blake2b_digest",

    # Keys and signing
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "Signer",
    "Ed25519Signer",
    "DEFAULT_SIGNER",

    # Transactions
    "TransactionBuilder",
    "BuildProtoOptions",
    "Transaction",
    "RawData",
    "TXContract",
    "ContractParameter",
    "KDAFee",
    "ContractType",
    "WithdrawType",
    "ClaimType",
    "VoteType",
    "AssetType",
    "AssetTriggerType",
    "SCType",
    "Operation",
    "OpaqueOperation",
    "Transfer",
    "Freeze",
    "Unfreeze",
    "Delegate",
    "Undelegate",
    "Withdraw",
    "Claim",
    "Vote",
    "CreateAsset",
    "CreateValidator",
    "SmartContract",
    "create_transfer",
    "create_transfer_with_royalties",
    "create_freeze",
    "create_unfreeze",
    "create_delegate",
    "create_undelegate",
    "create_withdraw",
    "create_claim",
    "create_fungible_token",
    "create_nft_collection",
    "create_mint_nft",
    "create_burn",
    "create_wipe",
    "create_pause",
    "create_resume",
    "create_validator",
    "create_vote",
    "create_proposal",
    "create_set_account_name",
    "create_smart_contract_call",
    "to_units",
    "from_units",
    "to_klv_units",
    "from_klv_units",
]
