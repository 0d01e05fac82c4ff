"""
Binary Writer

Implements the primitive encodings of the protobuf wire format: unsigned
varints (ULEB128), two's-complement signed varints, field tags and
length-prefixed byte strings.
"""

from typing import List

from ..constants import INT64_MIN, INT64_MAX, UINT64_MAX
from ..runtime.errors import MarshalError

# Wire types
WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN = 2
WIRE_FIXED32 = 5


class BinaryWriter:
    """
    Append-only binary writer.

    Every method appends to an internal buffer; ``to_bytes`` returns the
    accumulated output.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with length prefix using uvarint.

        Args:
            v: Bytes to write with length prefix
        """
        self.uvarint(len(v))
        self.bytes(v)

    def string_utf8(self, s: str) -> None:
        """Write UTF-8 string with length prefix."""
        self.len_prefixed_bytes(s.encode('utf-8'))

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Unsigned integer value in [0, 2**64)

        Raises:
            MarshalError: If the value does not fit in 64 unsigned bits
        """
        if v < 0 or v > UINT64_MAX:
            raise MarshalError(f"Value out of uint64 range: {v}", {"value": v})
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def varint(self, v: int) -> None:
        """
        Write a signed 64-bit integer as a two's-complement varint.

        Negative values always occupy ten bytes, as in protobuf int32/int64.

        Raises:
            MarshalError: If the value does not fit in 64 signed bits
        """
        if v < INT64_MIN or v > INT64_MAX:
            raise MarshalError(f"Value out of int64 range: {v}", {"value": v})
        self.uvarint(v & UINT64_MAX)

    def tag(self, field: int, wire_type: int) -> None:
        """
        Write a field key.

        Args:
            field: Field number (>= 1)
            wire_type: One of the WIRE_* constants
        """
        if field < 1 or field > 0x1FFFFFFF:
            raise MarshalError(f"Field number is out of range: {field}", {"field": field})
        self.uvarint((field << 3) | wire_type)

    def __len__(self) -> int:
        return len(self._bb)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
