from concurrent.futures import ThreadPoolExecutor

import pytest

from packet_decoder.evaluate import value, version_sum
from packet_decoder.packets import OperatorTag
from packet_decoder.packets.literal import LiteralPacket
from packet_decoder.packets.operation import OperatorPacket
from packet_decoder.transmission import decode_transmission


def lit(value, version=0):
    return LiteralPacket(version=version, value=value)


def op(tag, *children, version=0):
    return OperatorPacket(version=version, tag=tag, children=children)


@pytest.mark.parametrize("text, expected", [
    ("D2FE28", 6),
    ("38006F45291200", 9),
    ("EE00D40C823060", 14),
    ("8A004A801A8002F478", 16),
    ("620080001611562C8802118E34", 12),
    ("C0015000016115A2E0802F182340", 23),
    ("A0016C880162017C3686B18A3D4780", 31),
])
def test_version_sum(text, expected):
    assert version_sum(decode_transmission(text)) == expected


@pytest.mark.parametrize("text, expected", [
    ("D2FE28", 2021),
    ("38006F45291200", 1),
    ("EE00D40C823060", 3),
    ("C200B40A82", 3),
    ("04005AC33890", 54),
    ("880086C3E88112", 7),
    ("CE00C43D881120", 9),
    ("D8005AC2A8F0", 1),
    ("F600BC2D8F", 0),
    ("9C005AC2F8F0", 0),
    ("9C0141080250320F1802104A08", 1),
])
def test_value(text, expected):
    assert value(decode_transmission(text)) == expected


@pytest.mark.parametrize("tag, children, expected", [
    (OperatorTag.SUM, (1, 2, 3), 6),
    (OperatorTag.SUM, (7,), 7),
    (OperatorTag.PRODUCT, (2, 3, 4), 24),
    (OperatorTag.PRODUCT, (9,), 9),
    (OperatorTag.MINIMUM, (5, 2, 8), 2),
    (OperatorTag.MAXIMUM, (5, 2, 8), 8),
    (OperatorTag.GREATER_THAN, (5, 2), 1),
    (OperatorTag.GREATER_THAN, (2, 5), 0),
    (OperatorTag.GREATER_THAN, (5, 5), 0),
    (OperatorTag.LESS_THAN, (2, 5), 1),
    (OperatorTag.LESS_THAN, (5, 2), 0),
    (OperatorTag.EQUAL_TO, (4, 4), 1),
    (OperatorTag.EQUAL_TO, (4, 5), 0),
])
def test_operator_semantics(tag, children, expected):
    assert value(op(tag, *map(lit, children))) == expected


def test_results_are_not_limited_to_64_bits():
    big = 2**64 - 1
    assert value(op(OperatorTag.PRODUCT, lit(big), lit(big))) == big * big


def test_version_sum_counts_every_node():
    tree = op(
        OperatorTag.SUM,
        lit(1, version=1),
        op(OperatorTag.LESS_THAN, lit(1, version=2), lit(2, version=3), version=4),
        version=5,
    )
    assert version_sum(tree) == 15
    assert value(tree) == 2


def test_concurrent_evaluation_of_shared_tree():
    tree = decode_transmission("9C0141080250320F1802104A08")
    with ThreadPoolExecutor(max_workers=4) as executor:
        values = list(executor.map(value, [tree] * 16))
        sums = list(executor.map(version_sum, [tree] * 16))
    assert set(values) == {1}
    assert len(set(sums)) == 1


def test_value_rejects_non_packets():
    with pytest.raises(TypeError):
        value(object())
