"""
Transaction operations (contracts).

One pydantic model per supported contract kind plus an opaque variant for
kinds without a local model. Models carry camelCase aliases matching the
node's build-request JSON and know how to map themselves to and from the
wire fields in :mod:`klever_client.codec.contracts`.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Annotated, Any, Callable, ClassVar, Dict, Mapping, NamedTuple, Optional, Tuple, Type, Union

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from ..codec.contracts import decode_parameter, encode_parameter
from ..constants import INT64_MIN, UINT64_MAX
from ..runtime.address import KleverAddress, decode_address, encode_address
from ..runtime.errors import ErrorCode, MarshalError, ValidationError
from .validation import normalize_amount


class ContractType(IntEnum):
    """Contract type codes as carried in ``TXContract.Type``."""

    TRANSFER = 0
    CREATE_ASSET = 1
    CREATE_VALIDATOR = 2
    VALIDATOR_CONFIG = 3
    FREEZE = 4
    UNFREEZE = 5
    DELEGATE = 6
    UNDELEGATE = 7
    WITHDRAW = 8
    CLAIM = 9
    UNJAIL = 10
    ASSET_TRIGGER = 11
    SET_ACCOUNT_NAME = 12
    PROPOSAL = 13
    VOTE = 14
    CONFIG_ITO = 15
    SET_ITO_PRICES = 16
    BUY = 17
    SELL = 18
    CANCEL_MARKET_ORDER = 19
    CREATE_MARKETPLACE = 20
    CONFIG_MARKETPLACE = 21
    UPDATE_ACCOUNT_PERMISSION = 22
    DEPOSIT = 23
    ITO_TRIGGER = 24
    SMART_CONTRACT = 63

    @classmethod
    def parse(cls, kind: Any) -> Union["ContractType", int]:
        """
        Resolve a kind given as enum, integer code or name.

        Names are matched case-insensitively with or without underscores and
        the ``Contract``/``ContractType`` suffixes, so ``"Transfer"``,
        ``"TRANSFER"`` and ``"TransferContractType"`` are all accepted.
        Integer codes without a member are returned as plain ints.

        Raises:
            ValidationError: For unknown names or unsupported types
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, int) and not isinstance(kind, bool):
            try:
                return cls(kind)
            except ValueError:
                if kind < 0:
                    raise ValidationError(
                        f"Contract type must not be negative: {kind}",
                        ErrorCode.INVALID_PARAMETER,
                        {"kind": kind},
                    )
                return kind
        if isinstance(kind, str):
            key = kind.replace("_", "").lower()
            if key.isdigit():
                return cls.parse(int(key))
            member = _CONTRACT_NAMES.get(key)
            if member is not None:
                return member
        raise ValidationError(f"Unknown contract type: {kind!r}", ErrorCode.INVALID_PARAMETER, {"kind": repr(kind)})


def _contract_names() -> Dict[str, ContractType]:
    names = {}
    for member in ContractType:
        key = member.name.replace("_", "").lower()
        for suffix in ("", "type", "contract", "contracttype"):
            names.setdefault(key + suffix, member)
    return names


_CONTRACT_NAMES = MappingProxyType(_contract_names())


class WithdrawType(IntEnum):
    STAKING_REWARD = 0
    KDA_POOL = 1
    KDA_FEE_POOL = 2
    MARKET_ORDER_IDX_IN = 3
    MARKET_ORDER_IDX_OUT = 4


class ClaimType(IntEnum):
    STAKING_CLAIM = 0
    ALLOWANCE_CLAIM = 1
    MARKET_CLAIM = 2


class VoteType(IntEnum):
    YES = 0
    NO = 1
    ABSTAIN = 2


class AssetType(IntEnum):
    FUNGIBLE = 0
    NON_FUNGIBLE = 1
    SEMI_FUNGIBLE = 2


class AssetTriggerType(IntEnum):
    MINT = 0
    BURN = 1
    WIPE = 2
    PAUSE = 3
    RESUME = 4


class SCType(IntEnum):
    """Smart contract call kind."""

    INVOKE = 0
    DEPLOY = 1
    UPGRADE = 2


class InterestType(IntEnum):
    APR = 0
    FPR = 1


def _amount(value: Any) -> int:
    return normalize_amount(value)


Amount = Annotated[int, BeforeValidator(_amount)]


# Wire conversions: name -> (to_wire, from_wire)

def _to_utf8(value: str) -> bytes:
    return value.encode("utf-8")


def _from_utf8(value: bytes) -> str:
    return bytes(value).decode("utf-8")


def _to_call_value(value: Mapping[str, int]) -> list:
    return [{"AssetID": _to_utf8(asset), "Amount": value[asset]} for asset in sorted(value)]


def _from_call_value(value: list) -> Dict[str, int]:
    return {_from_utf8(item["AssetID"]): item["Amount"] for item in value}


def _to_hex_bytes(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.startswith(("0x", "0X")) else value)


_CONVERSIONS: Mapping[str, Tuple[Callable[[Any], Any], Callable[[Any], Any]]] = MappingProxyType({
    "int": (int, int),
    "bool": (bool, bool),
    "str": (str, str),
    "utf8": (_to_utf8, _from_utf8),
    "address": (decode_address, encode_address),
    "hex": (_to_hex_bytes, lambda v: bytes(v).hex()),
    "str_map": (dict, dict),
    "call_value": (_to_call_value, _from_call_value),
})


def _is_default(value: Any) -> bool:
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, bytes, str, list, dict)):
        return not value
    return False


class WireField(NamedTuple):
    """Model attribute <-> wire field mapping."""

    attr: str
    wire: str
    conv: str
    model: Optional[Type["WireModel"]] = None


class WireModel(BaseModel):
    """Base for models with a protobuf wire mapping."""

    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = ()

    model_config = {"populate_by_name": True, "frozen": True}

    def to_wire(self) -> Dict[str, Any]:
        """Wire field values for the codec; unset attributes are left out."""
        out: Dict[str, Any] = {}
        for f in self.WIRE_FIELDS:
            value = getattr(self, f.attr)
            if value is None:
                continue
            if f.conv == "model":
                out[f.wire] = value.to_wire()
            elif f.conv == "models":
                out[f.wire] = [item.to_wire() for item in value]
            elif f.conv == "model_map":
                out[f.wire] = {key: item.to_wire() for key, item in value.items()}
            else:
                out[f.wire] = _CONVERSIONS[f.conv][0](value)
        return out

    @classmethod
    def from_wire(cls, values: Mapping[str, Any]):
        """
        Rebuild a model from decoded wire values.

        Absent or default wire values leave optional attributes unset;
        required attributes receive the decoded default.
        """
        data: Dict[str, Any] = {}
        for f in cls.WIRE_FIELDS:
            value = values.get(f.wire)
            if value is None:
                continue
            if f.conv != "model" and _is_default(value) and not cls.model_fields[f.attr].is_required():
                continue
            if f.conv == "model":
                data[f.attr] = f.model.from_wire(value)
            elif f.conv == "models":
                data[f.attr] = tuple(f.model.from_wire(item) for item in value)
            elif f.conv == "model_map":
                data[f.attr] = {key: f.model.from_wire(item) for key, item in value.items()}
            else:
                data[f.attr] = _CONVERSIONS[f.conv][1](value)
        return cls.model_validate(data)


def _narrow(value: Any, path: str) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value < INT64_MIN or value > UINT64_MAX:
            raise MarshalError(f"{path} does not fit in 64 bits: {value}", {"field": path, "value": value})
        return value
    if isinstance(value, dict):
        return {k: _narrow(v, f"{path}.{k}") for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_narrow(v, f"{path}[{i}]") for i, v in enumerate(value)]
    return value


class Operation(WireModel):
    """Base class of every typed operation."""

    CONTRACT_TYPE: ClassVar[ContractType]

    @property
    def contract_type(self) -> ContractType:
        return self.CONTRACT_TYPE

    def to_request(self) -> Dict[str, Any]:
        """
        JSON-ready contract entry for the node build endpoint.

        Raises:
            MarshalError: If an integer does not fit in 64 bits
        """
        params = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        entry = {"contractType": int(self.CONTRACT_TYPE)}
        entry.update(_narrow(params, self.CONTRACT_TYPE.name.lower()))
        return entry

    def encode_parameter(self) -> Tuple[str, bytes]:
        """Encode as ``(type_url, value)`` for the ``Any`` parameter."""
        return encode_parameter(self.CONTRACT_TYPE, self.to_wire())

    @classmethod
    def decode_parameter(cls, type_url: str, value: bytes) -> "Operation":
        return cls.from_wire(decode_parameter(cls.CONTRACT_TYPE, type_url, value))


class Transfer(Operation):
    """Send an amount of KLV or a KDA to another account."""

    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.TRANSFER
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("receiver", "ToAddress", "address"),
        WireField("amount", "Amount", "int"),
        WireField("kda", "AssetID", "utf8"),
        WireField("kda_royalties", "KDARoyalties", "int"),
        WireField("klv_royalties", "KLVRoyalties", "int"),
    )

    receiver: KleverAddress
    amount: Amount
    kda: Optional[str] = None
    kda_royalties: Optional[Amount] = Field(None, alias="kdaRoyalties")
    klv_royalties: Optional[Amount] = Field(None, alias="klvRoyalties")


class Freeze(Operation):
    """Lock an amount into a staking bucket."""

    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.FREEZE
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("amount", "Amount", "int"),
        WireField("kda", "AssetID", "utf8"),
    )

    amount: Amount
    kda: Optional[str] = None


class Unfreeze(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.UNFREEZE
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("kda", "AssetID", "utf8"),
        WireField("bucket_id", "BucketID", "utf8"),
    )

    kda: str
    bucket_id: Optional[str] = Field(None, alias="bucketId")


class Delegate(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.DELEGATE
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("receiver", "ToAddress", "address"),
        WireField("bucket_id", "BucketID", "utf8"),
    )

    receiver: KleverAddress
    bucket_id: Optional[str] = Field(None, alias="bucketId")


class Undelegate(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.UNDELEGATE
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("bucket_id", "BucketID", "utf8"),
    )

    bucket_id: str = Field(alias="bucketId")


class Withdraw(Operation):
    """Withdraw staking rewards, pool balances or market order proceeds."""

    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.WITHDRAW
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("withdraw_type", "Type", "int"),
        WireField("kda", "AssetID", "utf8"),
        WireField("amount", "Amount", "int"),
        WireField("currency_id", "CurrencyID", "utf8"),
    )

    withdraw_type: WithdrawType = Field(alias="withdrawType")
    kda: Optional[str] = None
    amount: Optional[Amount] = None
    currency_id: Optional[str] = Field(None, alias="currencyID")


class Claim(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.CLAIM
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("claim_type", "Type", "int"),
        WireField("id", "ID", "utf8"),
    )

    claim_type: ClaimType = Field(alias="claimType")
    id: Optional[str] = None


class Vote(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.VOTE
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("proposal_id", "ProposalID", "int"),
        WireField("vote_type", "Type", "int"),
        WireField("amount", "Amount", "int"),
    )

    vote_type: VoteType = Field(alias="type")
    proposal_id: int = Field(alias="proposalId")
    amount: Optional[Amount] = None


# CreateAsset parts

class RoyaltyData(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("amount", "Amount", "int"),
        WireField("percentage", "Percentage", "int"),
    )

    amount: Amount
    percentage: int


class RoyaltySplitInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("percent_transfer_percentage", "PercentTransferPercentage", "int"),
        WireField("percent_transfer_fixed", "PercentTransferFixed", "int"),
        WireField("percent_market_percentage", "PercentMarketPercentage", "int"),
        WireField("percent_market_fixed", "PercentMarketFixed", "int"),
        WireField("percent_ito_percentage", "PercentITOPercentage", "int"),
        WireField("percent_ito_fixed", "PercentITOFixed", "int"),
    )

    percent_transfer_percentage: Optional[int] = Field(None, alias="percentTransferPercentage")
    percent_transfer_fixed: Optional[int] = Field(None, alias="percentTransferFixed")
    percent_market_percentage: Optional[int] = Field(None, alias="percentMarketPercentage")
    percent_market_fixed: Optional[int] = Field(None, alias="percentMarketFixed")
    percent_ito_percentage: Optional[int] = Field(None, alias="percentITOPercentage")
    percent_ito_fixed: Optional[int] = Field(None, alias="percentITOFixed")


class RoyaltiesInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("address", "Address", "address"),
        WireField("transfer_fixed", "TransferFixed", "int"),
        WireField("market_percentage", "MarketPercentage", "int"),
        WireField("market_fixed", "MarketFixed", "int"),
        WireField("ito_percentage", "ITOPercentage", "int"),
        WireField("ito_fixed", "ITOFixed", "int"),
        WireField("transfer_percentage", "TransferPercentage", "models", RoyaltyData),
        WireField("split_royalties", "SplitRoyalties", "model_map", RoyaltySplitInfo),
    )

    address: KleverAddress
    transfer_percentage: Optional[Tuple[RoyaltyData, ...]] = Field(None, alias="transferPercentage")
    transfer_fixed: Optional[Amount] = Field(None, alias="transferFixed")
    market_percentage: Optional[int] = Field(None, alias="marketPercentage")
    market_fixed: Optional[Amount] = Field(None, alias="marketFixed")
    ito_percentage: Optional[int] = Field(None, alias="itoPercentage")
    ito_fixed: Optional[Amount] = Field(None, alias="itoFixed")
    split_royalties: Optional[Dict[str, RoyaltySplitInfo]] = Field(None, alias="splitRoyalties")


class PropertiesInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("can_freeze", "CanFreeze", "bool"),
        WireField("can_wipe", "CanWipe", "bool"),
        WireField("can_pause", "CanPause", "bool"),
        WireField("can_mint", "CanMint", "bool"),
        WireField("can_burn", "CanBurn", "bool"),
        WireField("can_change_owner", "CanChangeOwner", "bool"),
        WireField("can_add_roles", "CanAddRoles", "bool"),
        WireField("limit_transfer", "LimitTransfer", "bool"),
    )

    can_freeze: Optional[bool] = Field(None, alias="canFreeze")
    can_wipe: Optional[bool] = Field(None, alias="canWipe")
    can_pause: Optional[bool] = Field(None, alias="canPause")
    can_mint: Optional[bool] = Field(None, alias="canMint")
    can_burn: Optional[bool] = Field(None, alias="canBurn")
    can_change_owner: Optional[bool] = Field(None, alias="canChangeOwner")
    can_add_roles: Optional[bool] = Field(None, alias="canAddRoles")
    limit_transfer: Optional[bool] = Field(None, alias="limitTransfer")


class AttributesInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("is_paused", "IsPaused", "bool"),
        WireField("is_nft_mint_stopped", "IsNFTMintStopped", "bool"),
        WireField("is_royalties_change_stopped", "IsRoyaltiesChangeStopped", "bool"),
        WireField("is_nft_metadata_change_stopped", "IsNFTMetadataChangeStopped", "bool"),
    )

    is_paused: Optional[bool] = Field(None, alias="isPaused")
    is_nft_mint_stopped: Optional[bool] = Field(None, alias="isNFTMintStopped")
    is_royalties_change_stopped: Optional[bool] = Field(None, alias="isRoyaltiesChangeStopped")
    is_nft_metadata_change_stopped: Optional[bool] = Field(None, alias="isNFTMetadataChangeStopped")


class StakingInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("interest_type", "InterestType", "int"),
        WireField("apr", "APR", "int"),
        WireField("min_epochs_to_claim", "MinEpochsToClaim", "int"),
        WireField("min_epochs_to_unstake", "MinEpochsToUnstake", "int"),
        WireField("min_epochs_to_withdraw", "MinEpochsToWithdraw", "int"),
    )

    interest_type: InterestType = Field(alias="interestType")
    apr: int
    min_epochs_to_claim: int = Field(alias="minEpochsToClaim")
    min_epochs_to_unstake: int = Field(alias="minEpochsToUnstake")
    min_epochs_to_withdraw: int = Field(alias="minEpochsToWithdraw")


class RolesInfo(WireModel):
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("address", "Address", "address"),
        WireField("has_role_mint", "HasRoleMint", "bool"),
        WireField("has_role_set_ito_prices", "HasRoleSetITOPrices", "bool"),
        WireField("has_role_deposit", "HasRoleDeposit", "bool"),
        WireField("has_role_transfer", "HasRoleTransfer", "bool"),
    )

    address: KleverAddress
    has_role_mint: Optional[bool] = Field(None, alias="hasRoleMint")
    has_role_set_ito_prices: Optional[bool] = Field(None, alias="hasRoleSetITOPrices")
    has_role_deposit: Optional[bool] = Field(None, alias="hasRoleDeposit")
    has_role_transfer: Optional[bool] = Field(None, alias="hasRoleTransfer")


class CreateAsset(Operation):
    """Issue a fungible token, NFT collection or SFT collection."""

    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.CREATE_ASSET
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("asset_type", "Type", "int"),
        WireField("name", "Name", "str"),
        WireField("ticker", "Ticker", "str"),
        WireField("owner_address", "OwnerAddress", "address"),
        WireField("logo", "Logo", "str"),
        WireField("uris", "URIs", "str_map"),
        WireField("precision", "Precision", "int"),
        WireField("initial_supply", "InitialSupply", "int"),
        WireField("max_supply", "MaxSupply", "int"),
        WireField("properties", "Properties", "model", PropertiesInfo),
        WireField("attributes", "Attributes", "model", AttributesInfo),
        WireField("admin_address", "AdminAddress", "address"),
        WireField("royalties", "Royalties", "model", RoyaltiesInfo),
        WireField("staking", "Staking", "model", StakingInfo),
        WireField("roles", "Roles", "models", RolesInfo),
    )

    asset_type: AssetType = Field(alias="type")
    name: str
    ticker: str
    owner_address: KleverAddress = Field(alias="ownerAddress")
    admin_address: Optional[KleverAddress] = Field(None, alias="adminAddress")
    logo: Optional[str] = None
    uris: Optional[Dict[str, str]] = None
    precision: int
    initial_supply: Optional[Amount] = Field(None, alias="initialSupply")
    max_supply: Amount = Field(alias="maxSupply")
    royalties: Optional[RoyaltiesInfo] = None
    properties: Optional[PropertiesInfo] = None
    attributes: Optional[AttributesInfo] = None
    staking: Optional[StakingInfo] = None
    roles: Optional[Tuple[RolesInfo, ...]] = None


class CreateValidator(Operation):
    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.CREATE_VALIDATOR
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("owner_address", "OwnerAddress", "address"),
    )
    CONFIG_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("bls_public_key", "BLSPublicKey", "hex"),
        WireField("reward_address", "RewardAddress", "address"),
        WireField("can_delegate", "CanDelegate", "bool"),
        WireField("commission", "Commission", "int"),
        WireField("max_delegation_amount", "MaxDelegationAmount", "int"),
        WireField("logo", "Logo", "str"),
        WireField("uris", "URIs", "str_map"),
        WireField("name", "Name", "str"),
    )

    bls_public_key: str = Field(alias="blsPublicKey")
    owner_address: KleverAddress = Field(alias="ownerAddress")
    reward_address: Optional[KleverAddress] = Field(None, alias="rewardAddress")
    can_delegate: Optional[bool] = Field(None, alias="canDelegate")
    commission: int
    max_delegation_amount: Optional[Amount] = Field(None, alias="maxDelegationAmount")
    logo: Optional[str] = None
    uris: Optional[Dict[str, str]] = None
    name: Optional[str] = None

    @field_validator("bls_public_key")
    @classmethod
    def check_hex(cls, v: str) -> str:
        try:
            _to_hex_bytes(v)
        except ValueError:
            raise ValueError("blsPublicKey must be hex encoded")
        return v

    def to_wire(self) -> Dict[str, Any]:
        out = super().to_wire()
        config = {}
        for f in self.CONFIG_FIELDS:
            value = getattr(self, f.attr)
            if value is not None:
                config[f.wire] = _CONVERSIONS[f.conv][0](value)
        out["Config"] = config
        return out

    @classmethod
    def from_wire(cls, values: Mapping[str, Any]) -> "CreateValidator":
        data: Dict[str, Any] = {"owner_address": encode_address(values["OwnerAddress"])}
        config = values.get("Config") or {}
        for f in cls.CONFIG_FIELDS:
            value = config.get(f.wire)
            if value is None:
                continue
            if _is_default(value) and not cls.model_fields[f.attr].is_required():
                continue
            data[f.attr] = _CONVERSIONS[f.conv][1](value)
        return cls.model_validate(data)


class SmartContract(Operation):
    """Invoke, deploy or upgrade a smart contract."""

    CONTRACT_TYPE: ClassVar[ContractType] = ContractType.SMART_CONTRACT
    WIRE_FIELDS: ClassVar[Tuple[WireField, ...]] = (
        WireField("sc_type", "Type", "int"),
        WireField("address", "Address", "address"),
        WireField("call_value", "CallValue", "call_value"),
        WireField("input", "Input", "utf8"),
        WireField("virtual_machine", "VirtualMachine", "str"),
    )

    sc_type: SCType = Field(alias="scType")
    address: KleverAddress
    call_value: Optional[Dict[str, Amount]] = Field(None, alias="callValue")
    input: Optional[str] = None
    virtual_machine: Optional[str] = Field(None, alias="virtualMachine")


class OpaqueOperation(BaseModel):
    """
    Operation of a kind without a local model.

    Parameters are passed to the node verbatim; it cannot be wire-encoded
    offline.
    """

    contract_type: int
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_request(self) -> Dict[str, Any]:
        entry = {"contractType": int(self.contract_type)}
        entry.update(_narrow(dict(self.params), f"contract_{int(self.contract_type)}"))
        return entry


AnyOperation = Union[Operation, OpaqueOperation]

OPERATION_TYPES: Mapping[ContractType, Type[Operation]] = MappingProxyType({
    cls.CONTRACT_TYPE: cls
    for cls in (
        Transfer, CreateAsset, CreateValidator, Freeze, Unfreeze, Delegate,
        Undelegate, Withdraw, Claim, Vote, SmartContract,
    )
})


def operation_from_parameter(contract_type: int, type_url: str, value: bytes) -> AnyOperation:
    """
    Decode a stored contract parameter back into an operation model.

    Kinds without a model come back as :class:`OpaqueOperation` holding the
    raw ``Any`` fields.
    """
    kind = ContractType.parse(int(contract_type))
    model = OPERATION_TYPES.get(kind) if isinstance(kind, ContractType) else None
    if model is None:
        return OpaqueOperation(contract_type=int(contract_type), params={"typeUrl": type_url, "value": value})
    return model.decode_parameter(type_url, value)


__all__ = [
    "ContractType",
    "WithdrawType",
    "ClaimType",
    "VoteType",
    "AssetType",
    "SCType",
    "InterestType",
    "Amount",
    "Operation",
    "OpaqueOperation",
    "AnyOperation",
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
    "RoyaltyData",
    "RoyaltySplitInfo",
    "RoyaltiesInfo",
    "PropertiesInfo",
    "AttributesInfo",
    "StakingInfo",
    "RolesInfo",
    "OPERATION_TYPES",
    "operation_from_parameter",
]
