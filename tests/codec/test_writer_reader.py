"""
Wire primitive tests for BinaryWriter and BinaryReader.
"""

import pytest

from klever_client.codec.reader import BinaryReader
from klever_client.codec.writer import WIRE_LEN, WIRE_VARINT, BinaryWriter
from klever_client.constants import INT64_MIN, UINT64_MAX
from klever_client.runtime.errors import MarshalError, UnmarshalError


def _written(method, *args) -> bytes:
    w = BinaryWriter()
    getattr(w, method)(*args)
    return w.to_bytes()


@pytest.mark.unit
class TestBinaryWriter:
    """Test primitive encodings."""

    @pytest.mark.parametrize("value,expected", [
        (0, b"\x00"),
        (1, b"\x01"),
        (127, b"\x7f"),
        (128, b"\x80\x01"),
        (300, b"\xac\x02"),
        (UINT64_MAX, b"\xff" * 9 + b"\x01"),
    ])
    def test_uvarint(self, value, expected):
        """Test ULEB128 encoding of known values."""
        assert _written("uvarint", value) == expected

    @pytest.mark.parametrize("value", [-1, UINT64_MAX + 1])
    def test_uvarint_out_of_range(self, value):
        with pytest.raises(MarshalError):
            _written("uvarint", value)

    def test_negative_varint_takes_ten_bytes(self):
        """Test two's-complement encoding of negative int64 values."""
        assert _written("varint", -1) == b"\xff" * 9 + b"\x01"
        assert len(_written("varint", INT64_MIN)) == 10

    def test_varint_out_of_range(self):
        with pytest.raises(MarshalError):
            _written("varint", INT64_MIN - 1)

    def test_tags(self):
        """Test that field keys combine field number and wire type."""
        assert _written("tag", 1, WIRE_VARINT) == b"\x08"
        assert _written("tag", 2, WIRE_LEN) == b"\x12"
        assert _written("tag", 16, WIRE_VARINT) == b"\x80\x01"

    def test_tag_rejects_field_zero(self):
        with pytest.raises(MarshalError):
            _written("tag", 0, WIRE_VARINT)

    def test_length_prefixed(self):
        assert _written("len_prefixed_bytes", b"abc") == b"\x03abc"
        assert _written("string_utf8", "é") == b"\x02\xc3\xa9"

    def test_len_tracks_buffer(self):
        w = BinaryWriter()
        w.bytes(b"\x01\x02")
        w.u8(3)
        assert len(w) == 3
        assert w.to_bytes() == b"\x01\x02\x03"


@pytest.mark.unit
class TestBinaryReader:
    """Test primitive decodings and bounds checks."""

    @pytest.mark.parametrize("value", [0, 1, 300, 2 ** 35, UINT64_MAX])
    def test_uvarint_readback(self, value):
        reader = BinaryReader(_written("uvarint", value))
        assert reader.uvarint() == value
        assert reader.eof

    @pytest.mark.parametrize("value", [-1, -300, INT64_MIN, 42])
    def test_varint_readback(self, value):
        assert BinaryReader(_written("varint", value)).varint() == value

    def test_truncated_varint(self):
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\x80").uvarint()

    def test_varint_too_long(self):
        """Test that more than ten varint bytes are rejected."""
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\x80" * 10 + b"\x01").uvarint()

    def test_varint_overflow(self):
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\xff" * 9 + b"\x02").uvarint()

    def test_tag_field_zero(self):
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\x00").tag()

    def test_tag(self):
        assert BinaryReader(b"\x12").tag() == (2, WIRE_LEN)

    def test_bytes_overrun(self):
        reader = BinaryReader(b"\x05ab")
        with pytest.raises(UnmarshalError):
            reader.len_prefixed_bytes()

    def test_invalid_utf8(self):
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\x02\xff\xfe").string_utf8()

    def test_skip(self):
        """Test skipping each supported wire type."""
        reader = BinaryReader(b"\xac\x02" + b"\x00" * 8 + b"\x02ab" + b"\x00" * 4)
        reader.skip(0)
        reader.skip(1)
        reader.skip(2)
        reader.skip(5)
        assert reader.eof

    def test_skip_unknown_wire_type(self):
        with pytest.raises(UnmarshalError):
            BinaryReader(b"\x00").skip(3)

    def test_offset(self):
        reader = BinaryReader(b"\x01\x02\x03")
        reader.u8()
        assert reader.offset == 1
        assert reader.bytes(2) == b"\x02\x03"
