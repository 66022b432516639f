from io import StringIO
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from packet_decoder.bitio import BitReader, BitWriter
from packet_decoder.errors import UnknownPacketType

VERSION_BITS = 3
TYPE_BITS = 3
LITERAL_TYPE_ID = 4
LITERAL_GROUP_BITS = 4
LITERAL_MAX_BITS = 64
BIT_LENGTH_BITS = 15
COUNT_BITS = 11
# header + one literal group: the shortest packet the grammar can produce
MIN_PACKET_BITS = VERSION_BITS + TYPE_BITS + 1 + LITERAL_GROUP_BITS

class OperatorTag(IntEnum):
    SUM = 0
    PRODUCT = 1
    MINIMUM = 2
    MAXIMUM = 3
    GREATER_THAN = 5
    LESS_THAN = 6
    EQUAL_TO = 7

COMPARISON_TAGS = frozenset((OperatorTag.GREATER_THAN, OperatorTag.LESS_THAN, OperatorTag.EQUAL_TO))

class LengthType(IntEnum):
    BIT_LENGTH = 0
    COUNT = 1

def operator_tag(type_id: int) -> OperatorTag:
    if type_id == LITERAL_TYPE_ID:
        raise UnknownPacketType(type_id)
    try:
        return OperatorTag(type_id)
    except ValueError:
        raise UnknownPacketType(type_id) from None

@dataclass(frozen=True)
class Packet(ABC):
    version: int  # 0..7

    @property
    @abstractmethod
    def type_id(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def dump(self, bw: BitWriter) -> None:
        raise NotImplementedError

    @abstractmethod
    def dump_string(self, tw) -> None:
        raise NotImplementedError

    def dump_header(self, bw: BitWriter) -> None:
        bw.write_uint(self.version, VERSION_BITS)
        bw.write_uint(self.type_id, TYPE_BITS)

    @staticmethod
    def load_from_text(tw: StringIO) -> "Packet":
        import packet_decoder.packets.literal
        import packet_decoder.packets.operation
        fields = tw.readline().split()
        if len(fields) != 2:
            raise ValueError(f"expected '<version> <type>' header, got {fields!r}")
        version, type_id = map(int, fields)
        if not 0 <= version < (1 << VERSION_BITS):
            raise ValueError(f"version out of range: {version}")
        if type_id == LITERAL_TYPE_ID:
            return packet_decoder.packets.literal.LiteralPacket.load_from_text(tw, version)
        return packet_decoder.packets.operation.OperatorPacket.load_from_text(tw, version, operator_tag(type_id))

    @staticmethod
    def load(br: BitReader) -> "Packet":
        import packet_decoder.packets.literal
        import packet_decoder.packets.operation
        version = br.read_uint(VERSION_BITS)
        type_id = br.read_uint(TYPE_BITS)
        if type_id == LITERAL_TYPE_ID:
            return packet_decoder.packets.literal.LiteralPacket.load_from_body(br, version)
        return packet_decoder.packets.operation.OperatorPacket.load_from_body(br, version, operator_tag(type_id))
