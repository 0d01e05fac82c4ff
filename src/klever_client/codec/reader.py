"""
Binary Reader

Decodes the primitives written by :class:`BinaryWriter`. Every overrun or
malformed varint raises :class:`UnmarshalError`.
"""

import builtins
from typing import Tuple

from ..runtime.errors import UnmarshalError
from .writer import WIRE_VARINT, WIRE_FIXED64, WIRE_LEN, WIRE_FIXED32

_MAX_VARINT_BYTES = 10


class BinaryReader:
    """
    Binary reader over an immutable buffer.

    Maintains a read offset; all reads are bounds-checked.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        if self._off >= len(self._buf):
            raise UnmarshalError("Buffer overflow: attempting to read beyond end", {"offset": self._off})
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value

        Raises:
            UnmarshalError: If the varint is truncated or longer than ten bytes
        """
        x = 0
        s = 0
        for _ in range(_MAX_VARINT_BYTES):
            if self._off >= len(self._buf):
                raise UnmarshalError("Buffer overflow: attempting to read varint beyond end", {"offset": self._off})
            b = self.u8()
            x |= (b & 0x7F) << s
            if b < 0x80:
                if x >> 64:
                    raise UnmarshalError("Varint overflows 64 bits", {"offset": self._off})
                return x
            s += 7
        raise UnmarshalError("Varint is too long", {"offset": self._off})

    def varint(self) -> int:
        """Read a two's-complement signed 64-bit varint."""
        x = self.uvarint()
        if x >= 1 << 63:
            x -= 1 << 64
        return x

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        if n < 0 or self._off + n > len(self._buf):
            raise UnmarshalError(f"Buffer overflow: attempting to read {n} bytes beyond end", {"offset": self._off})
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with length prefix using uvarint.

        Returns:
            Bytes with length read from uvarint prefix
        """
        n = self.uvarint()
        return self.bytes(n)

    def string_utf8(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        raw = self.len_prefixed_bytes()
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise UnmarshalError("Invalid UTF-8 string", {"offset": self._off}, e)

    def tag(self) -> Tuple[int, int]:
        """
        Read a field key.

        Returns:
            Tuple of (field number, wire type)
        """
        key = self.uvarint()
        field, wire_type = key >> 3, key & 0x7
        if field == 0:
            raise UnmarshalError("Invalid field number 0", {"offset": self._off})
        return field, wire_type

    def skip(self, wire_type: int) -> None:
        """Skip over a value of the given wire type (unknown fields)."""
        if wire_type == WIRE_VARINT:
            self.uvarint()
        elif wire_type == WIRE_FIXED64:
            self.bytes(8)
        elif wire_type == WIRE_LEN:
            self.len_prefixed_bytes()
        elif wire_type == WIRE_FIXED32:
            self.bytes(4)
        else:
            raise UnmarshalError(f"Unsupported wire type: {wire_type}", {"offset": self._off})
