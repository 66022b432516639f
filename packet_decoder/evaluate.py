import math

from packet_decoder.packets import OperatorTag, Packet
from packet_decoder.packets.literal import LiteralPacket
from packet_decoder.packets.operation import OperatorPacket

def version_sum(packet: Packet) -> int:
    """Sum of the version field over every packet in the tree."""
    if isinstance(packet, OperatorPacket):
        return packet.version + sum(version_sum(child) for child in packet.children)
    return packet.version

def value(packet: Packet) -> int:
    if isinstance(packet, LiteralPacket):
        return packet.value
    if not isinstance(packet, OperatorPacket):
        raise TypeError(f"not a packet: {packet!r}")
    vals = [value(child) for child in packet.children]
    tag = packet.tag
    if tag == OperatorTag.SUM:
        return sum(vals)
    elif tag == OperatorTag.PRODUCT:
        return math.prod(vals)
    elif tag == OperatorTag.MINIMUM:
        return min(vals)
    elif tag == OperatorTag.MAXIMUM:
        return max(vals)
    # comparisons only look at the first two sub-packets
    elif tag == OperatorTag.GREATER_THAN:
        return int(vals[0] > vals[1])
    elif tag == OperatorTag.LESS_THAN:
        return int(vals[0] < vals[1])
    elif tag == OperatorTag.EQUAL_TO:
        return int(vals[0] == vals[1])
    else:
        raise ValueError(f"Unknown operator tag: {tag!r}")
