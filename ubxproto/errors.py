"""Errors reported while parsing a UBX byte stream."""


class ParserError(Exception):
    """Base class for every error the UBX parser reports."""

    def _key(self) -> tuple:
        return (type(self),)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParserError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class OutOfMemoryError(ParserError):
    """The parser's buffer is too small to hold a packet."""

    def __init__(self, required_size: int) -> None:
        super().__init__(f"buffer too small: {required_size} bytes required")
        self.required_size = required_size

    def _key(self) -> tuple:
        return (type(self), self.required_size)

    def __repr__(self) -> str:
        return f"OutOfMemoryError(required_size={self.required_size})"


class InvalidChecksumError(ParserError):
    """A packet's checksum did not match its contents."""

    def __init__(self, expect: int, got: int) -> None:
        super().__init__(f"invalid checksum: expected 0x{expect:04x}, got 0x{got:04x}")
        self.expect = expect
        self.got = got

    def _key(self) -> tuple:
        return (type(self), self.expect, self.got)

    def __repr__(self) -> str:
        return f"InvalidChecksumError(expect=0x{self.expect:04x}, got=0x{self.got:04x})"