from packet_decoder.bitio import BitReader, BitWriter
from packet_decoder.hexcodec import hex_bit_length, hex_decode, hex_encode
from packet_decoder.packets import Packet


def decode_transmission(text: str) -> Packet:
    """Decode the outermost packet of a hex transmission. Bits after it are padding."""
    data = hex_decode(text)
    reader = BitReader(data, hex_bit_length(text))
    return Packet.load(reader)

def encode_transmission(packet: Packet) -> str:
    writer = BitWriter(packet)
    return hex_encode(writer.get_bytes(), writer.num_written_bits())
