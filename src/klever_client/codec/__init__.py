"""
Klever Binary Codec Module

Canonical protobuf wire encoding/decoding for transactions and their
contract parameters.

Key components:
- writer.py: Binary writer with varint/tag/primitive encoding
- reader.py: Binary reader with varint/tag/primitive decoding
- transaction_codec.py: Schema-driven field codec and the envelope schemas
- contracts.py: Per-contract message schemas
- hashes.py: BLAKE2b hashing helpers
"""

from .contracts import CONTRACT_SCHEMAS, decode_parameter, encode_parameter, schema_for
from .hashes import DEFAULT_HASHER, Blake2bHasher, blake2b_digest
from .reader import BinaryReader
from .transaction_codec import FieldCodec, MessageSchema, TransactionCodec
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "FieldCodec",
    "MessageSchema",
    "TransactionCodec",
    "CONTRACT_SCHEMAS",
    "decode_parameter",
    "encode_parameter",
    "schema_for",
    "Blake2bHasher",
    "blake2b_digest",
    "DEFAULT_HASHER",
]
