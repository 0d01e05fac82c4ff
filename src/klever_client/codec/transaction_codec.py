"""
Transaction Codec

Schema-driven protobuf wire encoding for the transaction envelope and the
contract messages it carries.

Encoding rules:
- scalars equal to their default (0, empty, false) are omitted
- repeated fields are written element by element in insertion order
- map entries are written sorted by key, key and value always present
- sub-messages are written whenever present, even if empty
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from ..constants import INT32_MIN, INT32_MAX, INT64_MIN, INT64_MAX, UINT32_MAX, UINT64_MAX
from ..runtime.errors import MarshalError, UnmarshalError
from .reader import BinaryReader
from .writer import BinaryWriter, WIRE_LEN, WIRE_VARINT

logger = logging.getLogger(__name__)

# Field kinds
UINT64 = "uint64"
INT64 = "int64"
INT32 = "int32"
UINT32 = "uint32"
ENUM = "enum"
BOOL = "bool"
BYTES = "bytes"
STRING = "string"
MESSAGE = "message"
MAP = "map"

_RANGES = {
    UINT64: (0, UINT64_MAX),
    INT64: (INT64_MIN, INT64_MAX),
    INT32: (INT32_MIN, INT32_MAX),
    ENUM: (INT32_MIN, INT32_MAX),
    UINT32: (0, UINT32_MAX),
}

_VARINT_KINDS = frozenset({UINT64, INT64, INT32, UINT32, ENUM, BOOL})


class Field(NamedTuple):
    """
    One field of a message schema.

    ``schema`` is the nested schema for MESSAGE fields and for MAP fields
    whose values are messages; MAP fields with string values leave it None.
    """

    number: int
    name: str
    kind: str
    repeated: bool = False
    schema: Optional["MessageSchema"] = None


class MessageSchema:
    """Ordered field list of one protobuf message."""

    def __init__(self, name: str, fields: Iterable[Field]):
        self.name = name
        self.fields: Tuple[Field, ...] = tuple(sorted(fields, key=lambda f: f.number))
        self._by_number = {f.number: f for f in self.fields}
        if len(self._by_number) != len(self.fields):
            raise ValueError(f"Duplicate field number in schema {name}")

    def field(self, number: int) -> Optional[Field]:
        return self._by_number.get(number)

    def default_values(self) -> Dict[str, Any]:
        """Decoded value of every field when absent from the wire."""
        return {f.name: _default_for(f) for f in self.fields}

    def __repr__(self) -> str:
        return f"MessageSchema({self.name!r}, fields={len(self.fields)})"


def _default_for(field: Field) -> Any:
    if field.repeated:
        return []
    if field.kind == MAP:
        return {}
    if field.kind == MESSAGE:
        return None
    if field.kind == BOOL:
        return False
    if field.kind == BYTES:
        return b""
    if field.kind == STRING:
        return ""
    return 0


def _check_range(schema: MessageSchema, field: Field, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MarshalError(
            f"{schema.name}.{field.name} must be an integer, got {type(value).__name__}",
            {"message": schema.name, "field": field.name},
        )
    lo, hi = _RANGES[field.kind]
    if value < lo or value > hi:
        raise MarshalError(
            f"{schema.name}.{field.name} out of {field.kind} range: {value}",
            {"message": schema.name, "field": field.name, "value": value},
        )
    return int(value)


class FieldCodec:
    """Encodes and decodes plain dicts against a :class:`MessageSchema`."""

    @staticmethod
    def encode(schema: MessageSchema, values: Mapping[str, Any]) -> bytes:
        """
        Encode a message.

        Args:
            schema: Message schema
            values: Field name -> value; missing names are treated as absent

        Returns:
            Canonical wire bytes

        Raises:
            MarshalError: If a value does not fit its field kind
        """
        writer = BinaryWriter()
        for field in schema.fields:
            value = values.get(field.name)
            if value is None:
                continue
            if field.repeated:
                for item in value:
                    FieldCodec._write_value(writer, schema, field, item, omit_default=False)
            elif field.kind == MAP:
                FieldCodec._write_map(writer, schema, field, value)
            else:
                FieldCodec._write_value(writer, schema, field, value, omit_default=True)
        return writer.to_bytes()

    @staticmethod
    def _write_value(writer: BinaryWriter, schema: MessageSchema, field: Field, value: Any,
                     omit_default: bool) -> None:
        kind = field.kind
        if kind == BOOL:
            if not isinstance(value, bool):
                raise MarshalError(f"{schema.name}.{field.name} must be a bool", {"field": field.name})
            if value or not omit_default:
                writer.tag(field.number, WIRE_VARINT)
                writer.uvarint(1 if value else 0)
        elif kind in _RANGES:
            value = _check_range(schema, field, value)
            if value or not omit_default:
                writer.tag(field.number, WIRE_VARINT)
                if kind in (UINT64, UINT32):
                    writer.uvarint(value)
                else:
                    writer.varint(value)
        elif kind == BYTES:
            if isinstance(value, str):
                value = value.encode("utf-8")
            if not isinstance(value, (bytes, bytearray)):
                raise MarshalError(f"{schema.name}.{field.name} must be bytes", {"field": field.name})
            if value or not omit_default:
                writer.tag(field.number, WIRE_LEN)
                writer.len_prefixed_bytes(bytes(value))
        elif kind == STRING:
            if not isinstance(value, str):
                raise MarshalError(f"{schema.name}.{field.name} must be a string", {"field": field.name})
            if value or not omit_default:
                writer.tag(field.number, WIRE_LEN)
                writer.string_utf8(value)
        elif kind == MESSAGE:
            if isinstance(value, (bytes, bytearray)):
                body = bytes(value)
            else:
                body = FieldCodec.encode(field.schema, value)
            writer.tag(field.number, WIRE_LEN)
            writer.len_prefixed_bytes(body)
        else:
            raise MarshalError(f"Unsupported field kind: {kind}", {"field": field.name})

    @staticmethod
    def _write_map(writer: BinaryWriter, schema: MessageSchema, field: Field, value: Mapping[str, Any]) -> None:
        for key in sorted(value):
            if not isinstance(key, str):
                raise MarshalError(f"{schema.name}.{field.name} keys must be strings", {"field": field.name})
            entry = BinaryWriter()
            entry.tag(1, WIRE_LEN)
            entry.string_utf8(key)
            item = value[key]
            entry.tag(2, WIRE_LEN)
            if field.schema is None:
                if not isinstance(item, str):
                    raise MarshalError(
                        f"{schema.name}.{field.name}[{key!r}] must be a string", {"field": field.name}
                    )
                entry.string_utf8(item)
            else:
                entry.len_prefixed_bytes(FieldCodec.encode(field.schema, item))
            writer.tag(field.number, WIRE_LEN)
            writer.len_prefixed_bytes(entry.to_bytes())

    @staticmethod
    def decode(schema: MessageSchema, data: bytes) -> Dict[str, Any]:
        """
        Decode a message into a dict holding every schema field.

        Unknown field numbers are skipped.

        Raises:
            UnmarshalError: On truncated input or a wire type that does not
                match the field kind
        """
        reader = BinaryReader(data)
        out = schema.default_values()
        while not reader.eof:
            number, wire_type = reader.tag()
            field = schema.field(number)
            if field is None:
                reader.skip(wire_type)
                continue

            expected = WIRE_VARINT if field.kind in _VARINT_KINDS else WIRE_LEN
            if wire_type != expected:
                raise UnmarshalError(
                    f"{schema.name}.{field.name}: wire type {wire_type}, expected {expected}",
                    {"message": schema.name, "field": field.name},
                )

            if field.kind == MAP:
                key, item = FieldCodec._read_map_entry(field, reader.len_prefixed_bytes())
                out[field.name][key] = item
                continue

            value = FieldCodec._read_value(field, reader)
            if field.repeated:
                out[field.name].append(value)
            else:
                out[field.name] = value
        return out

    @staticmethod
    def _read_value(field: Field, reader: BinaryReader) -> Any:
        kind = field.kind
        if kind == BOOL:
            return reader.uvarint() != 0
        if kind == UINT64:
            return reader.uvarint()
        if kind == INT64:
            return reader.varint()
        if kind in (INT32, ENUM):
            x = reader.uvarint() & 0xFFFFFFFF
            return x - (1 << 32) if x & 0x80000000 else x
        if kind == UINT32:
            return reader.uvarint() & 0xFFFFFFFF
        if kind == BYTES:
            return reader.len_prefixed_bytes()
        if kind == STRING:
            return reader.string_utf8()
        if kind == MESSAGE:
            return FieldCodec.decode(field.schema, reader.len_prefixed_bytes())
        raise UnmarshalError(f"Unsupported field kind: {kind}", {"field": field.name})

    @staticmethod
    def _read_map_entry(field: Field, data: bytes) -> Tuple[str, Any]:
        reader = BinaryReader(data)
        key = ""
        item: Any = "" if field.schema is None else field.schema.default_values()
        while not reader.eof:
            number, wire_type = reader.tag()
            if number == 1 and wire_type == WIRE_LEN:
                key = reader.string_utf8()
            elif number == 2 and wire_type == WIRE_LEN:
                if field.schema is None:
                    item = reader.string_utf8()
                else:
                    item = FieldCodec.decode(field.schema, reader.len_prefixed_bytes())
            else:
                reader.skip(wire_type)
        return key, item


# Envelope schemas

ANY_SCHEMA = MessageSchema("Any", [
    Field(1, "type_url", STRING),
    Field(2, "value", BYTES),
])

TX_CONTRACT_SCHEMA = MessageSchema("TXContract", [
    Field(1, "type", ENUM),
    Field(2, "parameter", MESSAGE, schema=ANY_SCHEMA),
])

KDA_FEE_SCHEMA = MessageSchema("KDAFee", [
    Field(1, "kda", BYTES),
    Field(2, "amount", INT64),
])

RAW_DATA_SCHEMA = MessageSchema("Raw", [
    Field(1, "nonce", UINT64),
    Field(2, "sender", BYTES),
    Field(3, "contracts", MESSAGE, repeated=True, schema=TX_CONTRACT_SCHEMA),
    Field(4, "permission_id", INT32),
    Field(5, "data", BYTES, repeated=True),
    Field(6, "k_app_fee", INT64),
    Field(7, "bandwidth_fee", INT64),
    Field(8, "version", UINT32),
    Field(9, "chain_id", BYTES),
    Field(10, "kda_fee", MESSAGE, schema=KDA_FEE_SCHEMA),
])

TRANSACTION_SCHEMA = MessageSchema("Transaction", [
    Field(1, "raw_data", MESSAGE, schema=RAW_DATA_SCHEMA),
    Field(2, "signatures", BYTES, repeated=True),
])


class TransactionCodec:
    """
    Envelope codec.

    Works on plain dicts keyed by the RawData field names; the pydantic
    models in :mod:`klever_client.tx.transaction` convert to and from them.
    """

    @staticmethod
    def encode_raw_data(raw: Mapping[str, Any]) -> bytes:
        """Canonical bytes of RawData alone (the hashed and signed bytes)."""
        return FieldCodec.encode(RAW_DATA_SCHEMA, raw)

    @staticmethod
    def decode_raw_data(data: bytes) -> Dict[str, Any]:
        return FieldCodec.decode(RAW_DATA_SCHEMA, data)

    @staticmethod
    def encode_transaction(raw_bytes: Optional[bytes], signatures: Iterable[bytes]) -> bytes:
        """
        Encode a full transaction.

        Args:
            raw_bytes: Already-encoded RawData, or None when absent
            signatures: Signatures in append order

        Returns:
            Transaction wire bytes
        """
        return FieldCodec.encode(TRANSACTION_SCHEMA, {
            "raw_data": raw_bytes,
            "signatures": list(signatures),
        })

    @staticmethod
    def decode_transaction(data: bytes) -> Tuple[Optional[Dict[str, Any]], List[bytes]]:
        """
        Decode a full transaction.

        Returns:
            Tuple of (RawData dict or None, signature list)
        """
        decoded = FieldCodec.decode(TRANSACTION_SCHEMA, data)
        logger.debug("Decoded transaction: %d bytes, %d signatures", len(data), len(decoded["signatures"]))
        return decoded["raw_data"], decoded["signatures"]


__all__ = [
    "Field",
    "MessageSchema",
    "FieldCodec",
    "TransactionCodec",
    "ANY_SCHEMA",
    "TX_CONTRACT_SCHEMA",
    "KDA_FEE_SCHEMA",
    "RAW_DATA_SCHEMA",
    "TRANSACTION_SCHEMA",
    "UINT64",
    "INT64",
    "INT32",
    "UINT32",
    "ENUM",
    "BOOL",
    "BYTES",
    "STRING",
    "MESSAGE",
    "MAP",
]
