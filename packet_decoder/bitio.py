# =========================================================
# Bit I/O over a forward-only cursor (MSB-first, as in BITS)
# =========================================================

from copy import deepcopy
from typing import Any, Protocol, overload, runtime_checkable

from packet_decoder.errors import UnexpectedEndOfInput

MAX_READ_BITS = 64

@runtime_checkable
class Dumpable(Protocol):
    def dump(self, bw: "BitWriter") -> None:
        pass

class BitWriter:
    __slots__ = ("_buf", "_bitbuf", "_bitcnt")
    @overload
    def __init__(self) -> None: ...
    @overload
    def __init__(self, data: "Dumpable") -> None: ...
    @overload
    def __init__(self, data: "BitWriter") -> None: ...
    def __init__(self, data=None) -> None:
        self._buf = bytearray()
        self._bitbuf = 0  # pending bits, right-aligned
        self._bitcnt = 0
        if data is None:
            return
        elif isinstance(data, BitWriter):
            self.extend(data)
        elif isinstance(data, Dumpable):
            data.dump(self)
        else:
            raise TypeError("Invalid arguments for BitWriter constructor")

    def write_uint(self, value: int, nbits: int) -> None:
        if nbits < 0:
            raise ValueError("nbits must be >= 0")
        if value < 0 or value >> nbits:
            raise ValueError(f"value {value} does not fit in {nbits} bits")
        self._bitbuf = (self._bitbuf << nbits) | value
        self._bitcnt += nbits
        while self._bitcnt >= 8:
            self._bitcnt -= 8
            self._buf.append((self._bitbuf >> self._bitcnt) & 0xFF)
        self._bitbuf &= (1 << self._bitcnt) - 1

    def write_bit(self, bit: bool | int) -> None:
        self.write_uint(1 if bit else 0, 1)

    def num_written_bits(self) -> int:
        return len(self._buf) * 8 + self._bitcnt

    def get_bytes(self) -> bytes:
        """Written bits, zero-padded to a whole byte. Does not modify the writer."""
        if self._bitcnt:
            return bytes(self._buf) + bytes([(self._bitbuf << (8 - self._bitcnt)) & 0xFF])
        return bytes(self._buf)

    def extend(self, other: "BitWriter") -> None:
        for byte in other._buf:
            self.write_uint(byte, 8)
        self.write_uint(other._bitbuf, other._bitcnt)

    def concatinate(self, other: "BitWriter") -> "BitWriter":
        res = deepcopy(self); res.extend(other)
        return res

    def __or__(self, value: Any) -> "BitWriter":
        return self.concatinate(value)

def dumps(dumpable: Dumpable) -> bytes:
    return BitWriter(dumpable).get_bytes()

class BitReader:
    __slots__ = ("_data", "_nbits", "_pos")
    def __init__(self, data: bytes, nbits: int | None = None):
        if nbits is None:
            nbits = len(data) * 8
        if nbits < 0 or nbits > len(data) * 8:
            raise ValueError("nbits exceeds the buffer")
        self._data = bytes(data)
        self._nbits = nbits
        self._pos = 0

    def __repr__(self) -> str:
        return f"BitReader(pos={self._pos},nbits={self._nbits})"

    def read_uint(self, nbits: int) -> int:
        if not 1 <= nbits <= MAX_READ_BITS:
            raise ValueError(f"nbits must be in 1..{MAX_READ_BITS}")
        if self._pos + nbits > self._nbits:
            raise UnexpectedEndOfInput(nbits, self.remaining())
        first = self._pos // 8
        last = (self._pos + nbits + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        # drop the bits after the field, then the bits before it
        tail = last * 8 - (self._pos + nbits)
        self._pos += nbits
        return (chunk >> tail) & ((1 << nbits) - 1)

    def read_bit(self) -> bool:
        return bool(self.read_uint(1))

    def peek_bit(self) -> bool:
        if self._pos >= self._nbits:
            raise UnexpectedEndOfInput(1, 0)
        byte, offset = divmod(self._pos, 8)
        return bool((self._data[byte] >> (7 - offset)) & 1)

    def narrow(self, nbits: int) -> int:
        """Move the end of readable data to bit `nbits`; returns the previous end."""
        if not self._pos <= nbits <= len(self._data) * 8:
            raise ValueError(f"cannot end reads at bit {nbits} (cursor at {self._pos})")
        prev, self._nbits = self._nbits, nbits
        return prev

    def bits_consumed(self) -> int:
        return self._pos

    def total_bits(self) -> int:
        return self._nbits

    def remaining(self) -> int:
        return self._nbits - self._pos

    def at_eof(self) -> bool:
        return self._pos >= self._nbits
