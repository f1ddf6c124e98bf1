import pytest

from huffpack.bits import (
    BitPacker,
    BitReader,
    convert_bytearray_to_string,
    convert_string_to_bytearray,
)
from huffpack.errors import TruncatedPayloadError


def test_pack_msb_first_with_zero_padding():
    packer = BitPacker()
    for bit in (0, 0, 0, 1, 1, 1, 1, 1, 1, 0):
        packer.push(bit)
    assert len(packer) == 10
    assert packer.finish() == (b"\x1f\x80", 10)


def test_push_code_matches_push():
    packer = BitPacker()
    packer.push_code("101")
    packer.push(1)
    packer.push_code("0000")
    assert packer.finish() == (b"\xb0", 8)


def test_finish_empty():
    assert BitPacker().finish() == (b"", 0)


def test_push_rejects_non_bits():
    with pytest.raises(ValueError):
        BitPacker().push(2)


def test_reader_stops_at_valid_bit_count():
    reader = BitReader(b"\x1f\x80", 10)
    assert list(reader) == [0, 0, 0, 1, 1, 1, 1, 1, 1, 0]
    assert reader.remaining == 0
    with pytest.raises(StopIteration):
        reader.next()


def test_reader_ignores_extra_bytes():
    reader = BitReader(b"\xff\xff\xff", 3)
    assert list(reader) == [1, 1, 1]


def test_reader_rejects_short_buffer():
    with pytest.raises(TruncatedPayloadError):
        BitReader(b"\x1f", 10)


def test_string_conversions():
    assert convert_string_to_bytearray("1") == bytearray(b"\x80")
    assert convert_string_to_bytearray("0000000100000010") == bytearray(b"\x01\x02")
    assert convert_bytearray_to_string(b"\x80\x01", 9) == "100000000"
