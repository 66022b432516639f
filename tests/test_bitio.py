import pytest

from packet_decoder.bitio import BitReader, BitWriter, dumps
from packet_decoder.errors import UnexpectedEndOfInput


def test_read_fields_of_literal_packet():
    br = BitReader(bytes([0xD2, 0xFE, 0x28]))
    assert br.read_uint(3) == 6
    assert br.read_uint(3) == 4
    assert br.read_uint(5) == 0b10111
    assert br.read_uint(5) == 0b11110
    assert br.read_uint(5) == 0b00101
    assert br.bits_consumed() == 21
    assert br.remaining() == 3
    assert not br.at_eof()


@pytest.mark.parametrize("skip", [0, 3, 7])
@pytest.mark.parametrize("width", [1, 7, 8, 13, 33, 64])
def test_single_bit_reads_concatenate_msb_first(skip, width):
    data = bytes(range(0x11, 0x11 * 11, 0x11))
    wide = BitReader(data)
    narrow = BitReader(data)
    if skip:
        wide.read_uint(skip)
        narrow.read_uint(skip)
    acc = 0
    for _ in range(width):
        acc = (acc << 1) | narrow.read_bit()
    assert wide.read_uint(width) == acc
    assert wide.bits_consumed() == narrow.bits_consumed() == skip + width


def test_read_past_end_fails_without_moving():
    br = BitReader(b"\xff")
    br.read_uint(5)
    with pytest.raises(UnexpectedEndOfInput) as excinfo:
        br.read_uint(4)
    assert excinfo.value.needed == 4
    assert excinfo.value.remaining == 3
    assert br.bits_consumed() == 5
    assert br.read_uint(3) == 0b111
    assert br.at_eof()


def test_end_of_input_is_an_eof_error():
    with pytest.raises(EOFError):
        BitReader(b"").read_bit()


def test_logical_length_hides_padding():
    br = BitReader(bytes([0xD2, 0xF0]), 12)
    assert br.read_uint(12) == 0xD2F
    with pytest.raises(UnexpectedEndOfInput):
        br.read_bit()


def test_logical_length_must_fit_buffer():
    with pytest.raises(ValueError):
        BitReader(b"\x00", 9)


@pytest.mark.parametrize("width", [0, 65, -1])
def test_width_out_of_range(width):
    with pytest.raises(ValueError):
        BitReader(bytes(16)).read_uint(width)


def test_peek_does_not_consume():
    br = BitReader(bytes([0b10000000]))
    assert br.peek_bit() is True
    assert br.peek_bit() is True
    assert br.read_bit() is True
    assert br.peek_bit() is False
    assert br.bits_consumed() == 1


def test_writer_produces_literal_packet():
    bw = BitWriter()
    for value, nbits in [(6, 3), (4, 3), (0b10111, 5), (0b11110, 5), (0b00101, 5)]:
        bw.write_uint(value, nbits)
    assert bw.num_written_bits() == 21
    assert bw.get_bytes() == bytes([0xD2, 0xFE, 0x28])


def test_writer_rejects_values_that_do_not_fit():
    bw = BitWriter()
    with pytest.raises(ValueError):
        bw.write_uint(8, 3)
    with pytest.raises(ValueError):
        bw.write_uint(-1, 4)


def test_writer_extend_and_concatenate():
    a = BitWriter()
    a.write_uint(0b101, 3)
    b = BitWriter()
    b.write_uint(0xABC, 12)
    joined = a | b
    assert a.num_written_bits() == 3
    assert joined.num_written_bits() == 15
    assert joined.get_bytes() == bytes([0xB5, 0x78])


def test_writer_then_reader_round_trip():
    fields = [(1, 1), (0, 1), (1234, 11), (2**64 - 1, 64), (5, 3)]
    bw = BitWriter()
    for value, nbits in fields:
        bw.write_uint(value, nbits)
    br = BitReader(bw.get_bytes(), bw.num_written_bits())
    assert [br.read_uint(nbits) for _, nbits in fields] == [value for value, _ in fields]
    assert br.at_eof()


def test_dumps_uses_dump_method():
    class Marker:
        def dump(self, bw):
            bw.write_uint(0b1, 1)
    assert dumps(Marker()) == b"\x80"


def test_writer_rejects_other_sources():
    with pytest.raises(TypeError):
        BitWriter(b"\x00")


def test_narrow_bounds_reads_until_restored():
    br = BitReader(bytes([0xFF, 0xFF]))
    br.read_uint(3)
    outer = br.narrow(8)
    assert outer == 16
    assert br.read_uint(5) == 0b11111
    with pytest.raises(UnexpectedEndOfInput):
        br.read_bit()
    br.narrow(outer)
    assert br.read_uint(8) == 0xFF
    with pytest.raises(ValueError):
        br.narrow(4)
