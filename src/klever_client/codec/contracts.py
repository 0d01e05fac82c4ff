"""
Contract message schemas.

Wire layout of every contract parameter that can be encoded offline, keyed by
contract type code. The encoded message is wrapped in a ``google.protobuf.Any``
whose type URL is ``type.googleapis.com/proto.<MessageName>``.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ..constants import ANY_TYPE_URL_PREFIX
from ..runtime.errors import UnmarshalError
from .transaction_codec import (
    BOOL, BYTES, ENUM, INT64, MAP, MESSAGE, STRING, UINT32, UINT64,
    Field, FieldCodec, MessageSchema,
)

TRANSFER = MessageSchema("TransferContract", [
    Field(1, "ToAddress", BYTES),
    Field(2, "Amount", INT64),
    Field(3, "AssetID", BYTES),
    Field(4, "KDARoyalties", INT64),
    Field(5, "KLVRoyalties", INT64),
])

FREEZE = MessageSchema("FreezeContract", [
    Field(1, "Amount", INT64),
    Field(2, "AssetID", BYTES),
])

UNFREEZE = MessageSchema("UnfreezeContract", [
    Field(1, "AssetID", BYTES),
    Field(2, "BucketID", BYTES),
])

DELEGATE = MessageSchema("DelegateContract", [
    Field(1, "ToAddress", BYTES),
    Field(2, "BucketID", BYTES),
])

UNDELEGATE = MessageSchema("UndelegateContract", [
    Field(1, "BucketID", BYTES),
])

WITHDRAW = MessageSchema("WithdrawContract", [
    Field(1, "Type", ENUM),
    Field(2, "AssetID", BYTES),
    Field(3, "Amount", INT64),
    Field(4, "CurrencyID", BYTES),
])

CLAIM = MessageSchema("ClaimContract", [
    Field(1, "Type", ENUM),
    Field(2, "ID", BYTES),
])

VOTE = MessageSchema("VoteContract", [
    Field(1, "ProposalID", UINT64),
    Field(2, "Type", ENUM),
    Field(3, "Amount", INT64),
])

# CreateAsset sub-messages

ROYALTY_DATA = MessageSchema("RoyaltyData", [
    Field(1, "Amount", INT64),
    Field(2, "Percentage", UINT32),
])

ROYALTY_SPLIT = MessageSchema("RoyaltySplitInfo", [
    Field(1, "PercentTransferPercentage", UINT32),
    Field(2, "PercentTransferFixed", UINT32),
    Field(3, "PercentMarketPercentage", UINT32),
    Field(4, "PercentMarketFixed", UINT32),
    Field(5, "PercentITOPercentage", UINT32),
    Field(6, "PercentITOFixed", UINT32),
])

ROYALTIES = MessageSchema("RoyaltiesInfo", [
    Field(1, "Address", BYTES),
    Field(2, "TransferFixed", INT64),
    Field(3, "MarketPercentage", UINT32),
    Field(4, "MarketFixed", INT64),
    Field(5, "ITOPercentage", UINT32),
    Field(6, "ITOFixed", INT64),
    Field(7, "TransferPercentage", MESSAGE, repeated=True, schema=ROYALTY_DATA),
    Field(8, "SplitRoyalties", MAP, schema=ROYALTY_SPLIT),
])

PROPERTIES = MessageSchema("AssetProperties", [
    Field(1, "CanFreeze", BOOL),
    Field(2, "CanWipe", BOOL),
    Field(3, "CanPause", BOOL),
    Field(4, "CanMint", BOOL),
    Field(5, "CanBurn", BOOL),
    Field(6, "CanChangeOwner", BOOL),
    Field(7, "CanAddRoles", BOOL),
    Field(8, "LimitTransfer", BOOL),
])

ATTRIBUTES = MessageSchema("AssetAttributes", [
    Field(1, "IsPaused", BOOL),
    Field(2, "IsNFTMintStopped", BOOL),
    Field(3, "IsRoyaltiesChangeStopped", BOOL),
    Field(4, "IsNFTMetadataChangeStopped", BOOL),
])

STAKING = MessageSchema("StakingInfo", [
    Field(1, "InterestType", ENUM),
    Field(2, "APR", UINT32),
    Field(3, "MinEpochsToClaim", UINT32),
    Field(4, "MinEpochsToUnstake", UINT32),
    Field(5, "MinEpochsToWithdraw", UINT32),
])

ROLES = MessageSchema("RolesInfo", [
    Field(1, "Address", BYTES),
    Field(2, "HasRoleMint", BOOL),
    Field(3, "HasRoleSetITOPrices", BOOL),
    Field(4, "HasRoleDeposit", BOOL),
    Field(5, "HasRoleTransfer", BOOL),
])

CREATE_ASSET = MessageSchema("CreateAssetContract", [
    Field(1, "Type", ENUM),
    Field(2, "Name", STRING),
    Field(3, "Ticker", STRING),
    Field(4, "OwnerAddress", BYTES),
    Field(5, "Logo", STRING),
    Field(6, "URIs", MAP),
    Field(7, "Precision", UINT32),
    Field(8, "InitialSupply", INT64),
    Field(9, "MaxSupply", INT64),
    Field(10, "Properties", MESSAGE, schema=PROPERTIES),
    Field(11, "Attributes", MESSAGE, schema=ATTRIBUTES),
    Field(12, "AdminAddress", BYTES),
    Field(13, "Royalties", MESSAGE, schema=ROYALTIES),
    Field(14, "Staking", MESSAGE, schema=STAKING),
    Field(15, "Roles", MESSAGE, repeated=True, schema=ROLES),
])

VALIDATOR_CONFIG = MessageSchema("ValidatorConfig", [
    Field(1, "BLSPublicKey", BYTES),
    Field(2, "RewardAddress", BYTES),
    Field(3, "CanDelegate", BOOL),
    Field(4, "Commission", UINT32),
    Field(5, "MaxDelegationAmount", INT64),
    Field(6, "Logo", STRING),
    Field(7, "URIs", MAP),
    Field(8, "Name", STRING),
])

CREATE_VALIDATOR = MessageSchema("CreateValidatorContract", [
    Field(1, "OwnerAddress", BYTES),
    Field(2, "Config", MESSAGE, schema=VALIDATOR_CONFIG),
])

CALL_VALUE = MessageSchema("CallValueData", [
    Field(1, "AssetID", BYTES),
    Field(2, "Amount", INT64),
])

SMART_CONTRACT = MessageSchema("SmartContract", [
    Field(1, "Type", ENUM),
    Field(2, "Address", BYTES),
    Field(3, "CallValue", MESSAGE, repeated=True, schema=CALL_VALUE),
    Field(4, "Input", BYTES),
    Field(5, "VirtualMachine", STRING),
])

# Contract type code -> schema
CONTRACT_SCHEMAS: Mapping[int, MessageSchema] = MappingProxyType({
    0: TRANSFER,
    1: CREATE_ASSET,
    2: CREATE_VALIDATOR,
    4: FREEZE,
    5: UNFREEZE,
    6: DELEGATE,
    7: UNDELEGATE,
    8: WITHDRAW,
    9: CLAIM,
    14: VOTE,
    63: SMART_CONTRACT,
})


def schema_for(contract_type: int) -> Optional[MessageSchema]:
    """Wire schema for a contract type code, or None if it has none."""
    return CONTRACT_SCHEMAS.get(int(contract_type))


def type_url(schema: MessageSchema) -> str:
    return ANY_TYPE_URL_PREFIX + schema.name


def encode_parameter(contract_type: int, values: Mapping[str, Any]) -> Tuple[str, bytes]:
    """
    Encode a contract parameter.

    Args:
        contract_type: Contract type code with a registered schema
        values: Wire field name -> value

    Returns:
        Tuple of (Any type URL, encoded message)

    Raises:
        KeyError: If the contract type has no schema
    """
    schema = CONTRACT_SCHEMAS[int(contract_type)]
    return type_url(schema), FieldCodec.encode(schema, values)


def decode_parameter(contract_type: int, url: str, value: bytes) -> Dict[str, Any]:
    """
    Decode a contract parameter back into wire field values.

    Raises:
        UnmarshalError: If the contract type has no schema or the type URL
            names a different message
    """
    schema = schema_for(contract_type)
    if schema is None:
        raise UnmarshalError(
            f"No wire schema for contract type {int(contract_type)}",
            {"contract_type": int(contract_type)},
        )
    if url and url != type_url(schema):
        raise UnmarshalError(
            f"Type URL {url!r} does not match contract type {int(contract_type)}",
            {"contract_type": int(contract_type), "type_url": url},
        )
    return FieldCodec.decode(schema, value)


__all__ = [
    "CONTRACT_SCHEMAS",
    "schema_for",
    "type_url",
    "encode_parameter",
    "decode_parameter",
]
