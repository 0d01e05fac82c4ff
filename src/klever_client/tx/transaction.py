"""
Transaction: immutable raw data plus an ordered signature list.

The hash is BLAKE2b-256 over the canonical encoding of RawData alone, so
signatures never change it. Signing appends; earlier signatures are kept.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pydantic
from pydantic import BaseModel

from ..codec.hashes import DEFAULT_HASHER
from ..codec.transaction_codec import TransactionCodec
from ..constants import HASH_LENGTH
from ..interfaces import Hasher, Signer
from ..runtime.errors import (
    EncodingError,
    ErrorCode,
    KleverError,
    TransactionError,
    UnmarshalError,
)
from ..signers.ed25519 import DEFAULT_SIGNER
from ..signers.signer import signature_bytes
from .operations import AnyOperation, ContractType, operation_from_parameter

logger = logging.getLogger(__name__)

_FROZEN = {"frozen": True, "populate_by_name": True}


class KDAFee(BaseModel):
    """Fee paid in a secondary asset instead of KLV."""

    kda: bytes = b""
    amount: int = 0

    model_config = _FROZEN


class ContractParameter(BaseModel):
    """``google.protobuf.Any`` holding an encoded contract message."""

    type_url: str = ""
    value: bytes = b""

    model_config = _FROZEN


class TXContract(BaseModel):
    type: int = 0
    parameter: Optional[ContractParameter] = None

    model_config = _FROZEN


class RawData(BaseModel):
    """Signed content of a transaction."""

    nonce: int = 0
    sender: bytes = b""
    contracts: Tuple[TXContract, ...] = ()
    permission_id: int = 0
    data: Tuple[bytes, ...] = ()
    k_app_fee: int = 0
    bandwidth_fee: int = 0
    version: int = 0
    chain_id: bytes = b""
    kda_fee: Optional[KDAFee] = None

    model_config = _FROZEN

    def to_wire(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "sender": self.sender,
            "contracts": [
                {
                    "type": c.type,
                    "parameter": None if c.parameter is None else {
                        "type_url": c.parameter.type_url,
                        "value": c.parameter.value,
                    },
                }
                for c in self.contracts
            ],
            "permission_id": self.permission_id,
            "data": list(self.data),
            "k_app_fee": self.k_app_fee,
            "bandwidth_fee": self.bandwidth_fee,
            "version": self.version,
            "chain_id": self.chain_id,
            "kda_fee": None if self.kda_fee is None else {"kda": self.kda_fee.kda, "amount": self.kda_fee.amount},
        }

    @classmethod
    def from_wire(cls, values: Mapping[str, Any]) -> "RawData":
        contracts = []
        for c in values.get("contracts", ()):
            param = c.get("parameter")
            contracts.append(TXContract(
                type=c.get("type", 0),
                parameter=None if param is None else ContractParameter(**param),
            ))
        fee = values.get("kda_fee")
        return cls(
            nonce=values.get("nonce", 0),
            sender=values.get("sender", b""),
            contracts=tuple(contracts),
            permission_id=values.get("permission_id", 0),
            data=tuple(values.get("data", ())),
            k_app_fee=values.get("k_app_fee", 0),
            bandwidth_fee=values.get("bandwidth_fee", 0),
            version=values.get("version", 0),
            chain_id=values.get("chain_id", b""),
            kda_fee=None if fee is None else KDAFee(**fee),
        )

    def to_bytes(self) -> bytes:
        """Canonical encoding (the hashed bytes)."""
        return TransactionCodec.encode_raw_data(self.to_wire())


# JSON object keys as produced by the node, with snake_case fallbacks
_RAW_KEYS = (
    ("nonce", "Nonce"),
    ("sender", "Sender"),
    ("contracts", "Contract"),
    ("permission_id", "PermissionID"),
    ("data", "Data"),
    ("k_app_fee", "KAppFee"),
    ("bandwidth_fee", "BandwidthFee"),
    ("version", "Version"),
    ("chain_id", "ChainID"),
    ("kda_fee", "KDAFee"),
)
_BYTES_FIELDS = frozenset({"sender", "chain_id"})
_INT_FIELDS = frozenset({"nonce", "permission_id", "k_app_fee", "bandwidth_fee", "version"})


def _pick(obj: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in obj:
            return obj[key]
    return None


def _b64decode(value: Any, field: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise UnmarshalError(f"{field} must be base64 text", {"field": field})
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 in {field}", ErrorCode.INVALID_BASE64, {"field": field}, e)


def _b64encode(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise UnmarshalError(f"{field} must be an integer", {"field": field})
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise UnmarshalError(f"{field} must be an integer: {value!r}", {"field": field}, e)


def _contract_type(value: Any) -> int:
    try:
        return int(ContractType.parse(value))
    except KleverError as e:
        raise UnmarshalError(f"Unknown contract type: {value!r}", {"type": repr(value)}, e)


def _raw_from_object(obj: Mapping[str, Any]) -> RawData:
    values: Dict[str, Any] = {}
    for name, json_key in _RAW_KEYS:
        value = _pick(obj, json_key, name)
        if value is None:
            continue
        if name in _BYTES_FIELDS:
            values[name] = _b64decode(value, json_key)
        elif name in _INT_FIELDS:
            values[name] = _int(value, json_key)
        elif name == "data":
            values[name] = tuple(_b64decode(v, json_key) for v in value)
        elif name == "kda_fee":
            values[name] = KDAFee(
                kda=_b64decode(_pick(value, "KDA", "kda") or b"", "KDAFee.KDA"),
                amount=_int(_pick(value, "Amount", "amount") or 0, "KDAFee.Amount"),
            )
        elif name == "contracts":
            contracts = []
            for c in value:
                param = _pick(c, "Parameter", "parameter")
                contracts.append(TXContract(
                    type=_contract_type(_pick(c, "Type", "type") or 0),
                    parameter=None if param is None else ContractParameter(
                        type_url=_pick(param, "type_url", "typeUrl") or "",
                        value=_b64decode(_pick(param, "value") or b"", "Parameter.value"),
                    ),
                ))
            values[name] = tuple(contracts)
    try:
        return RawData(**values)
    except pydantic.ValidationError as e:
        raise UnmarshalError("Invalid raw transaction object", {"errors": str(e)}, e)


def _raw_to_object(raw: RawData) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "Nonce": raw.nonce,
        "Sender": _b64encode(raw.sender),
        "Contract": [
            {
                "Type": c.type,
                **({} if c.parameter is None else {
                    "Parameter": {"type_url": c.parameter.type_url, "value": _b64encode(c.parameter.value)},
                }),
            }
            for c in raw.contracts
        ],
        "PermissionID": raw.permission_id,
        "Data": [_b64encode(d) for d in raw.data],
        "KAppFee": raw.k_app_fee,
        "BandwidthFee": raw.bandwidth_fee,
        "Version": raw.version,
        "ChainID": _b64encode(raw.chain_id),
    }
    if raw.kda_fee is not None:
        out["KDAFee"] = {"KDA": _b64encode(raw.kda_fee.kda), "Amount": raw.kda_fee.amount}
    return out


class Transaction:
    """
    Transaction ready for signing and broadcast.

    Holds exactly one immutable :class:`RawData` (or none, for an empty
    shell), the signatures in append order and the cached hash.
    """

    def __init__(self, raw_data: Optional[RawData] = None, signatures: Iterable[bytes] = (),
                 hasher: Optional[Hasher] = None):
        """
        Initialize transaction.

        Args:
            raw_data: Signed content; the hash is computed eagerly when given
            signatures: Existing signatures, in order
            hasher: Transaction hasher; BLAKE2b-256 by default
        """
        self._raw_data = raw_data
        self._hasher = hasher if hasher is not None else DEFAULT_HASHER
        self._signatures: List[bytes] = [bytes(s) for s in signatures]
        self._hash: Optional[str] = None
        if raw_data is not None:
            self.get_hash()

    @property
    def raw_data(self) -> Optional[RawData]:
        return self._raw_data

    @property
    def signatures(self) -> Tuple[bytes, ...]:
        return tuple(self._signatures)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def _require_raw(self) -> RawData:
        if self._raw_data is None:
            raise TransactionError("Transaction has no RawData", ErrorCode.MISSING_RAW_DATA)
        return self._raw_data

    def to_bytes(self) -> bytes:
        """
        Encode the full transaction (RawData and signatures).

        Raises:
            TransactionError: If there is no RawData
        """
        raw = self._require_raw()
        return TransactionCodec.encode_transaction(raw.to_bytes(), self._signatures)

    def to_hex(self) -> str:
        """Lowercase hex of :meth:`to_bytes`, without prefix."""
        return self.to_bytes().hex()

    def get_hash_bytes(self) -> bytes:
        """
        BLAKE2b-256 of the RawData encoding.

        Raises:
            TransactionError: If there is no RawData
        """
        raw = self._require_raw()
        return self._hasher.digest(raw.to_bytes(), HASH_LENGTH)

    def get_hash(self) -> str:
        """Hex transaction hash, cached on the instance."""
        if self._hash is None:
            self._hash = self.get_hash_bytes().hex()
            logger.debug("Computed transaction hash %s", self._hash)
        return self._hash

    async def sign(self, private_key: Any, signer: Optional[Signer] = None) -> "Transaction":
        """
        Sign the transaction hash and append the signature.

        Args:
            private_key: Key material passed through to the signer
            signer: Object with ``async sign_message(hash_bytes, private_key)``;
                defaults to the Ed25519 signer

        Returns:
            self
        """
        hash_bytes = self.get_hash_bytes()
        if signer is None:
            signer = DEFAULT_SIGNER
        signature = await signer.sign_message(hash_bytes, private_key)
        return self.add_signature(signature_bytes(signature))

    def add_signature(self, signature: Union[bytes, bytearray]) -> "Transaction":
        """Append an externally produced signature."""
        self._require_raw()
        self._signatures.append(bytes(signature))
        logger.debug("Appended signature %d to transaction %s", len(self._signatures), self.get_hash())
        return self

    def is_signed(self) -> bool:
        return len(self._signatures) > 0

    def get_total_fee(self) -> int:
        """KApp fee plus bandwidth fee; zero when there is no RawData."""
        if self._raw_data is None:
            return 0
        return self._raw_data.k_app_fee + self._raw_data.bandwidth_fee

    def operations(self) -> List[AnyOperation]:
        """
        Decode the stored contracts back into operation models.

        Raises:
            UnmarshalError: If a contract parameter does not decode
        """
        raw = self._require_raw()
        result = []
        for index, contract in enumerate(raw.contracts):
            param = contract.parameter or ContractParameter()
            try:
                result.append(operation_from_parameter(contract.type, param.type_url, param.value))
            except UnmarshalError:
                raise
            except KleverError as e:
                raise UnmarshalError(
                    f"Contract {index} does not decode: {e.message}",
                    {"index": index, "type": contract.type},
                    e,
                )
            except pydantic.ValidationError as e:
                raise UnmarshalError(
                    f"Contract {index} does not decode",
                    {"index": index, "type": contract.type},
                    e,
                )
        return result

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view in the node's object layout plus ``hash``."""
        out: Dict[str, Any] = {"Signature": [_b64encode(s) for s in self._signatures]}
        if self._raw_data is not None:
            out["RawData"] = _raw_to_object(self._raw_data)
            out["hash"] = self.get_hash()
        return out

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray]) -> "Transaction":
        """
        Decode a transaction from wire bytes.

        Raises:
            UnmarshalError: On malformed input
        """
        raw_values, signatures = TransactionCodec.decode_transaction(bytes(data))
        raw = None if raw_values is None else RawData.from_wire(raw_values)
        return cls(raw, signatures)

    @classmethod
    def from_hex(cls, hex_string: str) -> "Transaction":
        """Decode from hex, with or without ``0x`` prefix."""
        text = hex_string.strip()
        if text.startswith(("0x", "0X")):
            text = text[2:]
        try:
            data = bytes.fromhex(text)
        except ValueError as e:
            raise EncodingError("Invalid hex string", ErrorCode.INVALID_HEX, {"length": len(text)}, e)
        return cls.from_bytes(data)

    @classmethod
    def from_object(cls, obj: Mapping[str, Any]) -> "Transaction":
        """
        Build a transaction from the node's JSON object.

        Byte fields are base64 text, numbers may be numeric strings and
        contract types may be codes or enum names.
        """
        if not isinstance(obj, Mapping):
            raise UnmarshalError("Transaction object must be a mapping", {"type": type(obj).__name__})
        raw_obj = _pick(obj, "RawData", "raw_data", "rawData")
        raw = None if raw_obj is None else _raw_from_object(raw_obj)
        sigs = _pick(obj, "Signature", "signatures", "signature") or []
        return cls(raw, [_b64decode(s, "Signature") for s in sigs])

    @classmethod
    def from_transaction(cls, tx: "Transaction") -> "Transaction":
        """Independent copy; signing the copy leaves ``tx`` untouched."""
        return cls(tx.raw_data, tx.signatures, tx.hasher)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self._raw_data == other._raw_data and self._signatures == other._signatures

    def __repr__(self) -> str:
        if self._raw_data is None:
            return "Transaction(raw_data=None)"
        return (
            f"Transaction(hash={self.get_hash()}, contracts={len(self._raw_data.contracts)}, "
            f"signatures={len(self._signatures)})"
        )


__all__ = ["Transaction", "RawData", "TXContract", "ContractParameter", "KDAFee"]
