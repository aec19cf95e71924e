import io

import pytest

from bitops import BitWriter, BitReader
from base32768_errors import BadPaddingError


def make_reader(data: bytes) -> BitReader:
    return BitReader(io.BytesIO(data))


def test_bitreader_whole_and_partial_byte():
    assert make_reader(b"\xc3").read_bits(8) == (0xC3, 8)
    assert make_reader(b"\xc3").read_bits(4) == (0x03, 4)


def test_bitreader_continues_within_byte():
    br = make_reader(b"\xc3")
    br.read_bits(4)
    assert br.read_bits(4) == (0x0C, 4)


def test_bitreader_crosses_byte_boundary():
    br = make_reader(b"\xc3\xd4")
    assert br.read_bits(12) == (0x4C3, 12)
    assert br.read_bits(12) == (0x0D, 4)


def test_bitreader_short_read_and_past_eof():
    br = make_reader(b"\xc3")
    br.read_bits(4)
    assert br.read_bits(8) == (0x0C, 4)
    assert br.read_bits(8) == (0, 0)
    assert make_reader(b"").read_bits(15) == (0, 0)


def test_bitwriter_whole_and_partial_bytes():
    out = io.BytesIO()
    bw = BitWriter(out)
    bw.write_bits(0x03, 4)
    assert out.getvalue() == b""
    bw.write_bits(0x4C, 8)
    bw.write_bits(0x0D, 4)
    assert out.getvalue() == b"\xc3\xd4"


def test_bitwriter_masks_value_to_nbits():
    out = io.BytesIO()
    bw = BitWriter(out)
    bw.write_bits(0xFF3, 4)
    bw.write_bits(0xC, 4)
    assert out.getvalue() == b"\xc3"


def test_bitwriter_buffers_until_threshold():
    out = io.BytesIO()
    bw = BitWriter(out, 16)
    bw.write_bits(0x00C3, 23)
    assert out.getvalue() == b""
    bw.write_bits(0, 1)
    assert out.getvalue() == b"\xc3"


def test_bitwriter_negative_buffer_size_clamped():
    out = io.BytesIO()
    bw = BitWriter(out, -5)
    assert bw.buffer_size == 0
    bw.write_bits(0xC3, 8)
    assert out.getvalue() == b"\xc3"


def test_bitwriter_flush_without_and_with_padding():
    out = io.BytesIO()
    bw = BitWriter(out, 16)
    bw.write_bits(0xD4C3, 16)
    bw.flush(0)
    assert out.getvalue() == b"\xc3\xd4"

    out = io.BytesIO()
    bw = BitWriter(out, 16)
    bw.write_bits(0x00C3, 23)
    bw.flush(15)
    assert out.getvalue() == b"\xc3"


def test_bitwriter_long_buffer():
    out = io.BytesIO()
    bw = BitWriter(out, 28)
    bw.write_bits(0x2A, 7)
    bw.write_bits(0x5555555, 28)
    bw.write_bits(0x5555555, 28)
    bw.write_bits(0, 1)
    bw.flush(0)
    assert out.getvalue() == b"\xaa" * 7 + b"\x2a"


def test_bitwriter_flush_empty_is_noop():
    out = io.BytesIO()
    bw = BitWriter(out, 16)
    bw.flush(0)
    bw.flush(0)
    assert out.getvalue() == b""


@pytest.mark.parametrize("pad", [14, 23, 30])
def test_bitwriter_flush_rejects_bad_padding(pad):
    bw = BitWriter(io.BytesIO(), 16)
    bw.write_bits(0x00C3, 23)
    with pytest.raises(BadPaddingError):
        bw.flush(pad)


def test_bitwriter_flush_twice_rejected():
    out = io.BytesIO()
    bw = BitWriter(out, 16)
    bw.write_bits(0x00C3, 23)
    bw.flush(15)
    with pytest.raises(BadPaddingError):
        bw.flush(8)
    assert out.getvalue() == b"\xc3"
