class DecodeError(ValueError):
    """Base class for every failure while decoding a transmission."""

class InvalidCharacter(DecodeError):
    def __init__(self, char: str, index: int):
        super().__init__(f"invalid hex digit {char!r} at index {index}")
        self.char = char
        self.index = index

class UnexpectedEndOfInput(DecodeError, EOFError):
    def __init__(self, needed: int, remaining: int):
        super().__init__(f"read past end: need {needed} bits, have {remaining}")
        self.needed = needed
        self.remaining = remaining

class UnknownPacketType(DecodeError):
    def __init__(self, type_id: int):
        super().__init__(f"unknown packet type: {type_id}")
        self.type_id = type_id

class MalformedLength(DecodeError):
    pass
