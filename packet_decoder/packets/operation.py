from io import StringIO
from dataclasses import dataclass, field
from packet_decoder.bitio import BitReader, BitWriter
from packet_decoder.errors import MalformedLength, UnexpectedEndOfInput
from packet_decoder.packets import (
    BIT_LENGTH_BITS, COMPARISON_TAGS, COUNT_BITS, MIN_PACKET_BITS,
    LengthType, OperatorTag, Packet,
)

def check_children(tag: OperatorTag, children: tuple[Packet, ...]) -> None:
    if not children:
        raise MalformedLength(f"{tag.name} packet has no sub-packets")
    if tag in COMPARISON_TAGS and len(children) != 2:
        raise MalformedLength(f"{tag.name} packet needs exactly 2 sub-packets, got {len(children)}")

def _load_by_count(br: BitReader) -> list[Packet]:
    count = br.read_uint(COUNT_BITS)
    return [Packet.load(br) for _ in range(count)]

def _load_by_bit_length(br: BitReader) -> list[Packet]:
    total_bits = br.read_uint(BIT_LENGTH_BITS)
    start = br.bits_consumed()
    end = start + total_bits
    if end > br.total_bits():
        raise MalformedLength(
            f"sub-packets declared as {total_bits} bits, only {br.remaining()} left in transmission")
    children: list[Packet] = []
    # children may not read past the declared region
    outer_end = br.narrow(end)
    try:
        while br.bits_consumed() < end:
            left = end - br.bits_consumed()
            if left < MIN_PACKET_BITS:
                raise MalformedLength(f"{left} bits left of declared {total_bits}, too short for a packet")
            children.append(Packet.load(br))
    except UnexpectedEndOfInput as exc:
        raise MalformedLength(f"sub-packet runs past declared length of {total_bits} bits") from exc
    finally:
        br.narrow(outer_end)
    return children

@dataclass(frozen=True)
class OperatorPacket(Packet):
    """Operator (any type but 4) applied to its sub-packets."""
    tag: OperatorTag
    children: tuple[Packet, ...]
    # how the sub-packets were delimited on the wire; kept only so dump() reproduces the input
    length_type: LengthType = field(default=LengthType.BIT_LENGTH, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "tag", OperatorTag(self.tag))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "length_type", LengthType(self.length_type))

    @property
    def type_id(self) -> int:
        return int(self.tag)

    @staticmethod
    def load_from_body(br: BitReader, version: int, tag: OperatorTag) -> "OperatorPacket":
        length_type = LengthType(br.read_uint(1))
        if length_type == LengthType.COUNT:
            children = _load_by_count(br)
        else:
            children = _load_by_bit_length(br)
        children = tuple(children)
        check_children(tag, children)
        return OperatorPacket(version=version, tag=tag, children=children, length_type=length_type)

    def dump(self, bw: BitWriter) -> None:
        self.dump_header(bw)
        body = BitWriter()
        for child in self.children:
            child.dump(body)
        bw.write_uint(self.length_type, 1)
        if self.length_type == LengthType.COUNT:
            if len(self.children) >> COUNT_BITS:
                raise ValueError(f"too many sub-packets for count mode: {len(self.children)}")
            bw.write_uint(len(self.children), COUNT_BITS)
        else:
            nbits = body.num_written_bits()
            if nbits >> BIT_LENGTH_BITS:
                raise ValueError(f"sub-packets too long for bit-length mode: {nbits} bits")
            bw.write_uint(nbits, BIT_LENGTH_BITS)
        bw.extend(body)

    def dump_string(self, tw):
        print(self.version, self.type_id, file=tw)
        print(int(self.length_type), len(self.children), file=tw)
        for child in self.children:
            child.dump_string(tw)

    @staticmethod
    def load_from_text(tw: StringIO, version: int, tag: OperatorTag) -> "OperatorPacket":
        fields = tw.readline().split()
        if len(fields) != 2:
            raise ValueError(f"expected '<length_type> <count>' line, got {fields!r}")
        length_type, count = LengthType(int(fields[0])), int(fields[1])
        children = tuple(Packet.load_from_text(tw) for _ in range(count))
        check_children(tag, children)
        return OperatorPacket(version=version, tag=tag, children=children, length_type=length_type)
