"""
Operation helpers.

Each ``create_*`` function returns a ``(ContractType, params)`` pair that
``TransactionBuilder.add_operation`` accepts::

    builder.add_operation(*create_transfer(receiver=addr, amount=to_units("1.5")))

Parameters use the node's camelCase keys; unset optional values are left out.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..constants import KLV_PRECISION
from ..runtime.errors import InvalidAmountError
from .operations import AssetTriggerType, AssetType, ContractType

AmountLike = Union[int, str, Decimal]
OperationPair = Tuple[ContractType, Dict[str, Any]]


def _params(**values: Any) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def create_transfer(receiver: str, amount: AmountLike, kda: Optional[str] = None,
                    kda_royalties: Optional[AmountLike] = None,
                    klv_royalties: Optional[AmountLike] = None) -> OperationPair:
    return ContractType.TRANSFER, _params(
        receiver=receiver, amount=amount, kda=kda,
        kdaRoyalties=kda_royalties, klvRoyalties=klv_royalties,
    )


def create_transfer_with_royalties(receiver: str, amount: AmountLike, kda: Optional[str] = None,
                                   kda_royalties: Optional[AmountLike] = None,
                                   klv_royalties: Optional[AmountLike] = None) -> OperationPair:
    return create_transfer(receiver, amount, kda=kda, kda_royalties=kda_royalties,
                           klv_royalties=klv_royalties)


def create_freeze(amount: AmountLike, kda: Optional[str] = None) -> OperationPair:
    return ContractType.FREEZE, _params(amount=amount, kda=kda)


def create_unfreeze(kda: str, bucket_id: Optional[str] = None) -> OperationPair:
    return ContractType.UNFREEZE, _params(kda=kda, bucketId=bucket_id)


def create_delegate(receiver: str, bucket_id: Optional[str] = None) -> OperationPair:
    return ContractType.DELEGATE, _params(receiver=receiver, bucketId=bucket_id)


def create_undelegate(bucket_id: str) -> OperationPair:
    return ContractType.UNDELEGATE, _params(bucketId=bucket_id)


def create_withdraw(withdraw_type: int, kda: Optional[str] = None, amount: Optional[AmountLike] = None,
                    currency_id: Optional[str] = None) -> OperationPair:
    return ContractType.WITHDRAW, _params(
        withdrawType=int(withdraw_type), kda=kda, amount=amount, currencyID=currency_id,
    )


def create_claim(claim_type: int, id: Optional[str] = None) -> OperationPair:
    return ContractType.CLAIM, _params(claimType=int(claim_type), id=id)


def create_fungible_token(name: str, ticker: str, owner_address: str, precision: int,
                          max_supply: AmountLike, initial_supply: Optional[AmountLike] = None,
                          properties: Optional[Mapping[str, bool]] = None) -> OperationPair:
    """CreateAsset parameters for a fungible token."""
    return ContractType.CREATE_ASSET, _params(
        type=int(AssetType.FUNGIBLE), name=name, ticker=ticker, ownerAddress=owner_address,
        precision=precision, maxSupply=max_supply, initialSupply=initial_supply,
        properties=dict(properties) if properties else None,
    )


def create_nft_collection(name: str, ticker: str, owner_address: str, logo: Optional[str] = None,
                          uris: Optional[Mapping[str, str]] = None,
                          properties: Optional[Mapping[str, bool]] = None,
                          royalties: Optional[Mapping[str, Any]] = None) -> OperationPair:
    """CreateAsset parameters for an NFT collection: no decimals, unlimited supply."""
    return ContractType.CREATE_ASSET, _params(
        type=int(AssetType.NON_FUNGIBLE), name=name, ticker=ticker, ownerAddress=owner_address,
        precision=0, maxSupply=0, logo=logo,
        uris=dict(uris) if uris else None,
        properties=dict(properties) if properties else None,
        royalties=dict(royalties) if royalties else None,
    )


# Asset triggers have no local model; they go through the node with build().

def _trigger(trigger_type: AssetTriggerType, asset_id: str, **values: Any) -> OperationPair:
    return ContractType.ASSET_TRIGGER, _params(triggerType=int(trigger_type), assetId=asset_id, **values)


def create_mint_nft(asset_id: str, receiver: Optional[str] = None,
                    uris: Optional[Mapping[str, str]] = None, mime: Optional[str] = None) -> OperationPair:
    return _trigger(AssetTriggerType.MINT, asset_id, receiver=receiver,
                    uris=dict(uris) if uris else None, mime=mime)


def create_burn(asset_id: str, amount: AmountLike) -> OperationPair:
    return _trigger(AssetTriggerType.BURN, asset_id, amount=amount)


def create_wipe(asset_id: str, receiver: str, amount: AmountLike) -> OperationPair:
    """Admin-only removal of ``amount`` from ``receiver``."""
    return _trigger(AssetTriggerType.WIPE, asset_id, receiver=receiver, amount=amount)


def create_pause(asset_id: str) -> OperationPair:
    return _trigger(AssetTriggerType.PAUSE, asset_id)


def create_resume(asset_id: str) -> OperationPair:
    return _trigger(AssetTriggerType.RESUME, asset_id)


def create_validator(bls_public_key: str, owner_address: str, commission: int,
                     can_delegate: Optional[bool] = None, reward_address: Optional[str] = None,
                     max_delegation_amount: Optional[AmountLike] = None, name: Optional[str] = None,
                     logo: Optional[str] = None, uris: Optional[Mapping[str, str]] = None) -> OperationPair:
    return ContractType.CREATE_VALIDATOR, _params(
        blsPublicKey=bls_public_key, ownerAddress=owner_address, commission=commission,
        canDelegate=can_delegate, rewardAddress=reward_address,
        maxDelegationAmount=max_delegation_amount, name=name, logo=logo,
        uris=dict(uris) if uris else None,
    )


def create_vote(proposal_id: int, vote_type: int, amount: Optional[AmountLike] = None) -> OperationPair:
    return ContractType.VOTE, _params(proposalId=proposal_id, type=int(vote_type), amount=amount)


def create_proposal(parameters: Mapping[int, str], description: Optional[str] = None,
                    epochs_duration: Optional[int] = None) -> OperationPair:
    """Governance proposal: chain parameter index -> proposed value."""
    return ContractType.PROPOSAL, _params(
        parameters={int(k): str(v) for k, v in parameters.items()},
        description=description, epochsDuration=epochs_duration,
    )


def create_set_account_name(name: str) -> OperationPair:
    return ContractType.SET_ACCOUNT_NAME, {"name": name}


def create_smart_contract_call(address: str, sc_type: int = 0,
                               call_value: Optional[Mapping[str, AmountLike]] = None) -> OperationPair:
    return ContractType.SMART_CONTRACT, _params(
        address=address, scType=int(sc_type), callValue=dict(call_value) if call_value else None,
    )


def _decimal(amount: Any) -> Decimal:
    if isinstance(amount, bool) or isinstance(amount, float):
        raise InvalidAmountError(
            f"Amount must be an int, decimal string or Decimal, got {type(amount).__name__}",
            {"value": repr(amount)},
        )
    try:
        value = Decimal(str(amount).strip()) if not isinstance(amount, Decimal) else amount
    except InvalidOperation:
        raise InvalidAmountError(f"Amount is not a number: {amount!r}", {"value": repr(amount)})
    if not value.is_finite():
        raise InvalidAmountError(f"Amount is not finite: {amount!r}", {"value": repr(amount)})
    return value


def to_units(amount: AmountLike, precision: int = KLV_PRECISION) -> int:
    """
    Convert a display amount to base units, exactly.

    ``to_units("1.5")`` is ``1500000`` for a 6-decimal asset.

    Raises:
        InvalidAmountError: If the amount has more decimals than ``precision``
    """
    scaled = _decimal(amount).scaleb(precision)
    if scaled != scaled.to_integral_value():
        raise InvalidAmountError(
            f"Amount {amount} has more than {precision} decimal places",
            {"value": str(amount), "precision": precision},
        )
    return int(scaled)


def from_units(units: Union[int, str], precision: int = KLV_PRECISION) -> Decimal:
    """Convert base units to a display amount, exactly."""
    value = _decimal(units)
    if value != value.to_integral_value():
        raise InvalidAmountError(f"Units must be a whole number: {units}", {"value": str(units)})
    return value.scaleb(-precision)


def to_klv_units(amount: AmountLike) -> int:
    return to_units(amount, KLV_PRECISION)


def from_klv_units(units: Union[int, str]) -> Decimal:
    return from_units(units, KLV_PRECISION)


__all__ = [
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
