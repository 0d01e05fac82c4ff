"""
Transaction building, encoding and signing.
"""

from .builder import BuildProtoOptions, TransactionBuilder
from .helpers import (
    create_burn,
    create_claim,
    create_delegate,
    create_freeze,
    create_fungible_token,
    create_mint_nft,
    create_nft_collection,
    create_pause,
    create_proposal,
    create_resume,
    create_set_account_name,
    create_smart_contract_call,
    create_transfer,
    create_transfer_with_royalties,
    create_undelegate,
    create_unfreeze,
    create_validator,
    create_vote,
    create_wipe,
    create_withdraw,
    from_klv_units,
    from_units,
    to_klv_units,
    to_units,
)
from .operations import (
    AssetTriggerType,
    AssetType,
    Claim,
    ClaimType,
    ContractType,
    CreateAsset,
    CreateValidator,
    Delegate,
    Freeze,
    OpaqueOperation,
    Operation,
    SCType,
    SmartContract,
    Transfer,
    Undelegate,
    Unfreeze,
    Vote,
    VoteType,
    Withdraw,
    WithdrawType,
)
from .transaction import ContractParameter, KDAFee, RawData, Transaction, TXContract

__all__ = [
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
