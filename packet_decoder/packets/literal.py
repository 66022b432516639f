from io import StringIO
from dataclasses import dataclass
from packet_decoder.bitio import BitReader, BitWriter
from packet_decoder.errors import MalformedLength
from packet_decoder.packets import LITERAL_GROUP_BITS, LITERAL_MAX_BITS, LITERAL_TYPE_ID, Packet

def _check_value(value: int) -> None:
    if value < 0 or value >> LITERAL_MAX_BITS:
        raise ValueError(f"literal value must fit in {LITERAL_MAX_BITS} unsigned bits: {value}")

@dataclass(frozen=True)
class LiteralPacket(Packet):
    """Literal value (type 4), stored as 4-bit groups with a continuation bit each."""
    value: int

    @property
    def type_id(self) -> int:
        return LITERAL_TYPE_ID

    @staticmethod
    def load_from_body(br: BitReader, version: int) -> "LiteralPacket":
        value = 0
        while True:
            more = br.read_bit()
            value = (value << LITERAL_GROUP_BITS) | br.read_uint(LITERAL_GROUP_BITS)
            # leading zero groups are allowed, significant bits are not
            if value >> LITERAL_MAX_BITS:
                raise MalformedLength(f"literal wider than {LITERAL_MAX_BITS} bits")
            if not more:
                break
        return LiteralPacket(version=version, value=value)

    def groups(self) -> list[int]:
        """Value split into 4-bit groups, most significant first. Zero is a single group."""
        _check_value(self.value)
        mask = (1 << LITERAL_GROUP_BITS) - 1
        v = self.value
        out = [v & mask]
        v >>= LITERAL_GROUP_BITS
        while v:
            out.append(v & mask)
            v >>= LITERAL_GROUP_BITS
        out.reverse()
        return out

    def dump(self, bw: BitWriter) -> None:
        self.dump_header(bw)
        groups = self.groups()
        for i, group in enumerate(groups):
            bw.write_bit(i < len(groups) - 1)
            bw.write_uint(group, LITERAL_GROUP_BITS)

    def dump_string(self, tw):
        print(self.version, self.type_id, file=tw)
        print(self.value, file=tw)

    @staticmethod
    def load_from_text(tw: StringIO, version: int) -> "LiteralPacket":
        value = int(tw.readline().strip())
        _check_value(value)
        return LiteralPacket(version=version, value=value)
