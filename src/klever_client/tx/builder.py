"""
Transaction builder for Klever.

Collects operations and envelope metadata, then produces a transaction in one
of three ways:

- ``build_request``: JSON-ready request for the node's build endpoint
- ``build_proto``: fully offline, canonical wire encoding
- ``build``: node-assisted, through an attached network client
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from ..interfaces import AddressCodec, Hasher, NetworkClient
from ..runtime.address import AddressCodec as Bech32AddressCodec
from ..runtime.errors import (
    ClientRequiredError,
    ErrorCode,
    TransactionError,
    MissingChainIdError,
    UnsupportedOperationError,
    ValidationError,
    error_from_response,
)
from ..constants import KLV_ASSET_ID
from .operations import (
    OPERATION_TYPES,
    Amount,
    AnyOperation,
    Claim,
    ContractType,
    CreateAsset,
    CreateValidator,
    Delegate,
    Freeze,
    OpaqueOperation,
    SmartContract,
    Transfer,
    Undelegate,
    Unfreeze,
    Vote,
    Withdraw,
)
from .transaction import ContractParameter, KDAFee, RawData, Transaction, TXContract
from .validation import (
    require_address,
    require_non_negative,
    require_positive,
    require_text,
    validate_model,
)

logger = logging.getLogger(__name__)


class Fees(BaseModel):
    k_app_fee: Amount = Field(0, alias="kAppFee")
    bandwidth_fee: Amount = Field(0, alias="bandwidthFee")

    model_config = {"populate_by_name": True}


class KdaFeeOption(BaseModel):
    kda: str
    amount: Amount

    model_config = {"populate_by_name": True}


class BuildProtoOptions(BaseModel):
    """Per-call overrides for :meth:`TransactionBuilder.build_proto`."""

    chain_id: Optional[Union[str, int]] = Field(None, alias="chainId")
    sender: Optional[str] = None
    nonce: Optional[Amount] = None
    fees: Optional[Fees] = None
    kda_fee: Optional[KdaFeeOption] = Field(None, alias="kdaFee")
    permission_id: Optional[int] = Field(None, alias="permissionId")
    data: Optional[List[str]] = None

    model_config = {"populate_by_name": True}


# Contract type -> typed adder
_ADDERS: Mapping[ContractType, str] = MappingProxyType({
    ContractType.TRANSFER: "add_transfer",
    ContractType.CREATE_ASSET: "add_create_asset",
    ContractType.CREATE_VALIDATOR: "add_create_validator",
    ContractType.FREEZE: "add_freeze",
    ContractType.UNFREEZE: "add_unfreeze",
    ContractType.DELEGATE: "add_delegate",
    ContractType.UNDELEGATE: "add_undelegate",
    ContractType.WITHDRAW: "add_withdraw",
    ContractType.CLAIM: "add_claim",
    ContractType.VOTE: "add_vote",
    ContractType.SMART_CONTRACT: "add_smart_contract",
})


def _missing_operations() -> ValidationError:
    return ValidationError("At least one operation is required", ErrorCode.MISSING_OPERATIONS)


def _check_chain_id(chain_id: Any) -> str:
    if isinstance(chain_id, bool) or not isinstance(chain_id, (str, int)) or chain_id == "":
        raise ValidationError("Chain ID must be a non-empty string", ErrorCode.INVALID_PARAMETER,
                              {"chain_id": repr(chain_id)})
    return str(chain_id)


def _check_kda_fee(asset: Any, amount: Any) -> Tuple[str, int]:
    require_text(asset, "KDA fee asset")
    if asset == KLV_ASSET_ID:
        raise ValidationError(
            "KDA fee cannot be KLV; use the KApp and bandwidth fees instead",
            ErrorCode.INVALID_PARAMETER,
            {"asset": asset},
        )
    return asset, require_non_negative(amount, "KDA fee amount")


def _network_chain_id(client: NetworkClient) -> Optional[str]:
    network = client.get_network()
    if network is None:
        return None
    if isinstance(network, Mapping):
        chain_id = network.get("chainId", network.get("chain_id"))
    else:
        chain_id = getattr(network, "chain_id", None)
    return None if chain_id in (None, "") else str(chain_id)


class TransactionBuilder:
    """
    Fluent transaction builder.

    Every setter and adder mutates the builder and returns it. Operations keep
    their insertion order all the way to the wire.
    """

    def __init__(self, client: Optional[NetworkClient] = None, hasher: Optional[Hasher] = None,
                 address_codec: Optional[AddressCodec] = None):
        """
        Initialize builder.

        Args:
            client: Optional network client used for chain id lookup and
                node-assisted building
            hasher: Hasher given to built transactions; BLAKE2b-256 by default
            address_codec: Codec for the sender address; bech32 "klv" by default
        """
        self._client = client
        self._hasher = hasher
        self._address_codec = address_codec if address_codec is not None else Bech32AddressCodec()
        self._operations: List[AnyOperation] = []
        self._chain_id: Optional[str] = None
        self._sender: Optional[str] = None
        self._nonce: Optional[int] = None
        self._kda_fee: Optional[Tuple[str, int]] = None
        self._permission_id: Optional[int] = None
        self._data: Optional[Tuple[str, ...]] = None

    @classmethod
    def create(cls, client: Optional[NetworkClient] = None) -> TransactionBuilder:
        return cls(client)

    # Client

    def set_client(self, client: Optional[NetworkClient]) -> TransactionBuilder:
        self._client = client
        return self

    def get_client(self) -> Optional[NetworkClient]:
        return self._client

    # Envelope metadata

    def set_chain_id(self, chain_id: Union[str, int]) -> TransactionBuilder:
        """Set an explicit chain id (takes precedence over the client's network)."""
        self._chain_id = _check_chain_id(chain_id)
        return self

    def set_sender(self, address: str) -> TransactionBuilder:
        """
        Set the sender account.

        Raises:
            InvalidAddressError: If the address does not decode to 32 bytes
        """
        self._sender = require_address(address, "sender address")
        return self

    def set_nonce(self, nonce: Union[int, str]) -> TransactionBuilder:
        """
        Set the account nonce.

        Raises:
            InvalidAmountError: If the nonce is negative or not an integer
        """
        self._nonce = require_non_negative(nonce, "nonce")
        return self

    def set_kda_fee(self, asset: str, amount: Union[int, str]) -> TransactionBuilder:
        """
        Pay fees in a secondary asset.

        Raises:
            ValidationError: If the asset is empty or is the native asset
            InvalidAmountError: If the amount is negative
        """
        self._kda_fee = _check_kda_fee(asset, amount)
        return self

    def set_permission_id(self, permission_id: int) -> TransactionBuilder:
        if isinstance(permission_id, bool) or not isinstance(permission_id, int):
            raise ValidationError("Permission ID must be an integer", ErrorCode.INVALID_PARAMETER,
                                  {"permission_id": repr(permission_id)})
        self._permission_id = permission_id
        return self

    def set_data(self, data: Sequence[str]) -> TransactionBuilder:
        """Attach free-form data blobs (UTF-8 text)."""
        if isinstance(data, str) or not all(isinstance(item, str) for item in data):
            raise ValidationError("Data must be a list of strings", ErrorCode.INVALID_PARAMETER)
        self._data = tuple(data)
        return self

    # Operations

    @property
    def operations(self) -> Tuple[AnyOperation, ...]:
        return tuple(self._operations)

    def _accept(self, operation: AnyOperation) -> TransactionBuilder:
        self._operations.append(operation)
        kind = getattr(operation, "CONTRACT_TYPE", None)
        logger.debug(
            "Added %s operation (%d total)",
            kind.name if kind is not None else f"opaque({operation.contract_type})",
            len(self._operations),
        )
        return self

    def add_operation(self, kind: Union[ContractType, int, str],
                      params: Optional[Mapping[str, Any]] = None) -> TransactionBuilder:
        """
        Add an operation by kind.

        Known kinds are validated through their typed adder; unknown kind
        codes are kept verbatim as an :class:`OpaqueOperation`.

        Args:
            kind: ContractType, integer code or kind name
            params: Operation parameters, camelCase or snake_case keys
        """
        params = dict(params or {})
        code = ContractType.parse(kind)
        adder = _ADDERS.get(code) if isinstance(code, ContractType) else None
        if adder is None:
            return self._accept(OpaqueOperation(contract_type=int(code), params=params))

        model = validate_model(OPERATION_TYPES[code], params)
        kwargs = {
            name: getattr(model, name)
            for name in type(model).model_fields
            if getattr(model, name) is not None
        }
        return getattr(self, adder)(**kwargs)

    def add_transfer(self, receiver: str, amount: Union[int, str], kda: Optional[str] = None,
                     kda_royalties: Optional[Union[int, str]] = None,
                     klv_royalties: Optional[Union[int, str]] = None) -> TransactionBuilder:
        """
        Transfer KLV or a KDA.

        Raises:
            InvalidAddressError: If the receiver is not a valid address
            InvalidAmountError: If the amount is not positive
        """
        require_address(receiver, "recipient address")
        amount = require_positive(amount, "transfer amount")
        return self._accept(validate_model(Transfer, {
            "receiver": receiver,
            "amount": amount,
            "kda": kda or None,
            "kda_royalties": kda_royalties or None,
            "klv_royalties": klv_royalties or None,
        }))

    def add_freeze(self, amount: Union[int, str], kda: Optional[str] = None) -> TransactionBuilder:
        amount = require_positive(amount, "freeze amount")
        return self._accept(validate_model(Freeze, {"amount": amount, "kda": kda or None}))

    def add_unfreeze(self, kda: str, bucket_id: Optional[str] = None) -> TransactionBuilder:
        require_text(kda, "kda")
        return self._accept(validate_model(Unfreeze, {"kda": kda, "bucket_id": bucket_id or None}))

    def add_delegate(self, receiver: str, bucket_id: Optional[str] = None) -> TransactionBuilder:
        require_address(receiver, "validator address")
        return self._accept(validate_model(Delegate, {"receiver": receiver, "bucket_id": bucket_id or None}))

    def add_undelegate(self, bucket_id: str) -> TransactionBuilder:
        require_text(bucket_id, "bucket_id")
        return self._accept(validate_model(Undelegate, {"bucket_id": bucket_id}))

    def add_withdraw(self, withdraw_type: int, kda: Optional[str] = None,
                     amount: Optional[Union[int, str]] = None,
                     currency_id: Optional[str] = None) -> TransactionBuilder:
        return self._accept(validate_model(Withdraw, {
            "withdraw_type": withdraw_type,
            "kda": kda,
            "amount": amount,
            "currency_id": currency_id,
        }))

    def add_claim(self, claim_type: int, id: Optional[str] = None) -> TransactionBuilder:
        return self._accept(validate_model(Claim, {"claim_type": claim_type, "id": id}))

    def add_vote(self, vote_type: int, proposal_id: int,
                 amount: Optional[Union[int, str]] = None) -> TransactionBuilder:
        return self._accept(validate_model(Vote, {
            "vote_type": vote_type,
            "proposal_id": proposal_id,
            "amount": amount,
        }))

    def add_create_asset(self, asset_type: int, name: str, ticker: str, owner_address: str,
                         precision: int, max_supply: Union[int, str], **options: Any) -> TransactionBuilder:
        """
        Create a token or collection.

        ``options`` takes the optional CreateAsset fields (``logo``, ``uris``,
        ``initial_supply``, ``admin_address``, ``royalties``, ``properties``,
        ``attributes``, ``staking``, ``roles``) in snake_case or camelCase.
        """
        data = dict(options)
        data.update({
            "asset_type": asset_type,
            "name": name,
            "ticker": ticker,
            "owner_address": owner_address,
            "precision": precision,
            "max_supply": max_supply,
        })
        return self._accept(validate_model(CreateAsset, data))

    def add_create_validator(self, bls_public_key: str, owner_address: str, commission: int,
                             **options: Any) -> TransactionBuilder:
        data = dict(options)
        data.update({
            "bls_public_key": bls_public_key,
            "owner_address": owner_address,
            "commission": commission,
        })
        return self._accept(validate_model(CreateValidator, data))

    def add_smart_contract(self, address: str, sc_type: int,
                           call_value: Optional[Mapping[str, Union[int, str]]] = None,
                           input: Optional[str] = None,
                           virtual_machine: Optional[str] = None) -> TransactionBuilder:
        """
        Invoke, deploy or upgrade a smart contract.

        Raises:
            InvalidAddressError: If the contract address is not valid
        """
        require_address(address, "contract address")
        return self._accept(validate_model(SmartContract, {
            "address": address,
            "sc_type": sc_type,
            "call_value": dict(call_value) if call_value else None,
            "input": input,
            "virtual_machine": virtual_machine,
        }))

    # Build modes

    def build_request(self) -> Dict[str, Any]:
        """
        JSON-ready request for the node's build endpoint.

        Only metadata that was explicitly set is included. The KDA fee is sent
        as its asset id only; the node computes the amount.

        Raises:
            ValidationError: If there are no operations
            MarshalError: If an integer does not fit in 64 bits
        """
        if not self._operations:
            raise _missing_operations()

        request: Dict[str, Any] = {"contracts": [op.to_request() for op in self._operations]}
        if self._sender is not None:
            request["sender"] = self._sender
        if self._nonce is not None:
            request["nonce"] = self._nonce
        if self._kda_fee is not None:
            request["kdaFee"] = self._kda_fee[0]
        if self._permission_id is not None:
            request["permissionId"] = self._permission_id
        if self._data is not None:
            request["data"] = list(self._data)
        logger.debug("Built request with %d contracts", len(request["contracts"]))
        return request

    def _resolve_options(self, options: Any, overrides: Dict[str, Any]) -> BuildProtoOptions:
        if isinstance(options, BuildProtoOptions):
            data = options.model_dump(exclude_none=True)
        else:
            data = dict(options or {})
        data.update({k: v for k, v in overrides.items() if v is not None})
        return validate_model(BuildProtoOptions, data)

    def build_proto(self, options: Union[BuildProtoOptions, Mapping[str, Any], None] = None,
                    **overrides: Any) -> Transaction:
        """
        Build the transaction fully offline.

        Values resolve as: override, then builder state, then (chain id only)
        the client's network.

        Raises:
            ValidationError: No operations, or sender/nonce missing
            MissingChainIdError: No chain id from any source
            InvalidAddressError: Sender does not decode
            UnsupportedOperationError: An opaque operation is present
            MarshalError: A value does not fit its wire field
        """
        if not self._operations:
            raise _missing_operations()

        opts = self._resolve_options(options, overrides)

        chain_id = _check_chain_id(opts.chain_id) if opts.chain_id is not None else self._chain_id
        if not chain_id and self._client is not None:
            chain_id = _network_chain_id(self._client)
        if not chain_id:
            raise MissingChainIdError(
                "Chain ID is required; set it on the builder, pass chain_id, or attach a client"
            )

        sender = opts.sender or self._sender
        if not sender:
            raise ValidationError("Sender address is required", ErrorCode.MISSING_SENDER)
        sender_bytes = self._address_codec.decode(sender)

        nonce = opts.nonce if opts.nonce is not None else self._nonce
        if nonce is None:
            raise ValidationError("Nonce is required", ErrorCode.MISSING_NONCE)
        nonce = require_non_negative(nonce, "nonce")

        logger.debug("Building offline transaction: chain=%s, operations=%d", chain_id, len(self._operations))

        kda_fee = None
        fee_asset = self._kda_fee
        if opts.kda_fee is not None:
            fee_asset = _check_kda_fee(opts.kda_fee.kda, opts.kda_fee.amount)
        if fee_asset is not None:
            kda_fee = KDAFee(kda=fee_asset[0].encode("utf-8"), amount=fee_asset[1])

        permission_id = opts.permission_id if opts.permission_id is not None else self._permission_id
        data = opts.data if opts.data is not None else self._data
        fees = opts.fees or Fees()
        k_app_fee = require_non_negative(fees.k_app_fee, "kApp fee")
        bandwidth_fee = require_non_negative(fees.bandwidth_fee, "bandwidth fee")

        raw = RawData(
            nonce=nonce,
            sender=sender_bytes,
            contracts=tuple(self._encode_operation(op) for op in self._operations),
            permission_id=permission_id or 0,
            data=tuple(item.encode("utf-8") for item in (data or ())),
            k_app_fee=k_app_fee,
            bandwidth_fee=bandwidth_fee,
            chain_id=str(chain_id).encode("utf-8"),
            kda_fee=kda_fee,
        )
        tx = Transaction(raw, hasher=self._hasher)
        logger.debug("Built offline transaction %s", tx.get_hash())
        return tx

    @staticmethod
    def _encode_operation(operation: AnyOperation) -> TXContract:
        if isinstance(operation, OpaqueOperation):
            raise UnsupportedOperationError(
                f"Contract type {operation.contract_type} cannot be encoded offline; use build()",
                {"contract_type": operation.contract_type},
            )
        type_url, value = operation.encode_parameter()
        return TXContract(
            type=int(operation.CONTRACT_TYPE),
            parameter=ContractParameter(type_url=type_url, value=value),
        )

    async def build(self) -> Transaction:
        """
        Build through the node.

        Raises:
            ClientRequiredError: If no client is attached
            ValidationError: If there are no operations
            TransactionError: If the node answers with an error
        """
        if self._client is None:
            raise ClientRequiredError(
                "A network client is required for node-assisted building; use build_proto() offline"
            )
        if not self._operations:
            raise _missing_operations()

        request = self.build_request()
        logger.debug("Requesting node build for %d contracts", len(request["contracts"]))
        response = await self._client.build_transaction(request)

        error = error_from_response(response)
        if error is not None:
            raise error
        result = response.get("result")
        if result is None:
            raise TransactionError("Node response has no result", ErrorCode.NODE_ERROR,
                                   {"keys": sorted(response)})
        return Transaction.from_object(result)

    def reset(self) -> TransactionBuilder:
        """Clear operations and all metadata; the client stays attached."""
        self._operations = []
        self._chain_id = None
        self._sender = None
        self._nonce = None
        self._kda_fee = None
        self._permission_id = None
        self._data = None
        return self

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return (
            f"TransactionBuilder(operations={len(self._operations)}, "
            f"sender={self._sender!r}, nonce={self._nonce!r}, chain_id={self._chain_id!r})"
        )


__all__ = ["TransactionBuilder", "BuildProtoOptions", "Fees", "KdaFeeOption"]
