from packet_decoder.errors import InvalidCharacter

_HEX_VALUES = {c: int(c, 16) for c in "0123456789abcdefABCDEF"}


def _nibbles(text: str) -> list[int]:
    out = []
    for i, c in enumerate(text):
        v = _HEX_VALUES.get(c)
        if v is None:
            raise InvalidCharacter(c, i)
        out.append(v)
    return out

def hex_decode(text: str) -> bytes:
    """Pack hex digits into bytes, high nibble first. An odd trailing digit is zero-padded."""
    nibbles = _nibbles(text.strip())
    data = bytearray()
    for i in range(0, len(nibbles) - 1, 2):
        data.append((nibbles[i] << 4) | nibbles[i+1])
    if len(nibbles) % 2:
        data.append(nibbles[-1] << 4)
    return bytes(data)

def hex_bit_length(text: str) -> int:
    """Number of meaningful bits in `text` (the odd-length pad nibble excluded)."""
    return 4 * len(text.strip())

def hex_encode(data: bytes, nbits: int | None = None) -> str:
    if nbits is None:
        nbits = len(data) * 8
    if nbits < 0 or nbits > len(data) * 8:
        raise ValueError("nbits out of range")
    return data.hex().upper()[:(nbits + 3) // 4]
