"""Configuration values: key ids, value types and their key/value wire form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Any, Callable, ClassVar, MutableSequence

from .cfg_keys import key_id_for, name_for_key, value_type_for


class StorageSize(Enum):
    """Size class of a configuration value, as coded in bits 28-30 of its key id."""

    ONE_BIT = 1
    ONE_BYTE = 2
    TWO_BYTES = 3
    FOUR_BYTES = 4
    EIGHT_BYTES = 5

    def to_usize(self) -> int:
        """Number of bytes the value takes on the wire."""
        return _STORAGE_BYTES[self]


_STORAGE_BYTES = {
    StorageSize.ONE_BIT: 1,
    StorageSize.ONE_BYTE: 1,
    StorageSize.TWO_BYTES: 2,
    StorageSize.FOUR_BYTES: 4,
    StorageSize.EIGHT_BYTES: 8,
}


@dataclass(frozen=True)
class KeyId:
    """A 32-bit configuration key id."""

    SIZE: ClassVar[int] = 4

    value: int

    def value_size(self) -> StorageSize:
        code = (self.value >> 28) & 0b111
        try:
            return StorageSize(code)
        except ValueError:
            raise ValueError(
                f"key ID 0x{self.value:08X} has invalid size code {code}"
            ) from None

    def group_id(self) -> int:
        return (self.value >> 16) & 0xFF

    def item_id(self) -> int:
        return self.value & 0xFF


class CfgInfMask(IntFlag):
    """Which kinds of information messages are enabled on a port."""

    ERROR = 0x01
    WARNING = 0x02
    NOTICE = 0x04
    TEST = 0x08
    DEBUG = 0x10


_INF_MASK_ALL = 0x1F


class DataBits(IntEnum):
    EIGHT = 0
    SEVEN = 1


class Parity(IntEnum):
    NONE = 0
    ODD = 1
    EVEN = 2


class StopBits(IntEnum):
    HALF = 0
    ONE = 1
    ONE_HALF = 2
    TWO = 3


class AlignmentToReferenceTime(IntEnum):
    """Time system that measurements or time pulses are aligned to."""

    UTC = 0
    GPS = 1
    GLO = 2
    BDS = 3
    GAL = 4


class TpPulse(IntEnum):
    """Whether a time pulse is defined by its period or its frequency."""

    PERIOD = 0
    FREQ = 1


class TpPulseLength(IntEnum):
    """Whether a time pulse's length is given as a ratio or a duration."""

    RATIO = 0
    LENGTH = 1


_INT_TYPES = {
    "u8": (1, False),
    "u16": (2, False),
    "i16": (2, True),
    "u32": (4, False),
    "u64": (8, False),
}

_ENUM_TYPES: dict[str, type[IntEnum]] = {
    "DataBits": DataBits,
    "Parity": Parity,
    "StopBits": StopBits,
    "AlignmentToReferenceTime": AlignmentToReferenceTime,
    "TpPulse": TpPulse,
    "TpPulseLength": TpPulseLength,
}


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"not a boolean value: {value!r}")


def _coerce_mask(value: Any) -> CfgInfMask:
    raw = int(value)
    if raw & ~_INF_MASK_ALL or raw < 0:
        raise ValueError(f"invalid information message mask: {value!r}")
    return CfgInfMask(raw)


def _coerce(value_type: str, value: Any) -> Any:
    if value_type == "bool":
        return _coerce_bool(value)
    if value_type == "CfgInfMask":
        return _coerce_mask(value)
    if value_type in _ENUM_TYPES:
        enum_cls = _ENUM_TYPES[value_type]
        try:
            return enum_cls(value)
        except ValueError:
            raise ValueError(f"invalid {value_type} value: {value!r}") from None
    size, signed = _INT_TYPES[value_type]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{value_type} value must be an integer, got {value!r}")
    bits = size * 8
    low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
    if not low <= value <= high:
        raise ValueError(f"{value} does not fit in {value_type}")
    return value


def _encode(value_type: str, value: Any) -> bytes:
    if value_type in _INT_TYPES:
        size, signed = _INT_TYPES[value_type]
        return value.to_bytes(size, "little", signed=signed)
    return bytes([int(value)])


def _decode_bool(data: bytes) -> bool:
    if data[0] not in (0, 1):
        raise ValueError(f"invalid boolean byte: {data[0]}")
    return bool(data[0])


def _decode(value_type: str, data: bytes) -> Any:
    decoders: dict[str, Callable[[bytes], Any]] = {
        "bool": _decode_bool,
        "CfgInfMask": lambda d: CfgInfMask(d[0] & _INF_MASK_ALL),
    }
    if value_type in decoders:
        return decoders[value_type](data)
    if value_type in _ENUM_TYPES:
        return _coerce(value_type, data[0])
    size, signed = _INT_TYPES[value_type]
    return int.from_bytes(data[:size], "little", signed=signed)


@dataclass(frozen=True)
class CfgVal:
    """A named configuration item together with its value."""

    name: str
    value: Any

    def __post_init__(self) -> None:
        value_type = value_type_for(self.name)
        object.__setattr__(self, "value", _coerce(value_type, self.value))

    def key(self) -> KeyId:
        return KeyId(key_id_for(self.name))

    def __len__(self) -> int:
        return KeyId.SIZE + self.key().value_size().to_usize()

    def is_empty(self) -> bool:
        return len(self) == 0

    @classmethod
    def parse(cls, buf: bytes) -> CfgVal:
        """Decode a key/value pair; raises KeyError for an unknown key id."""
        data = bytes(buf)
        if len(data) < KeyId.SIZE:
            raise ValueError("buffer too short for a key ID")
        key_id = int.from_bytes(data[: KeyId.SIZE], "little")
        name = name_for_key(key_id)
        size = KeyId(key_id).value_size().to_usize()
        payload = data[KeyId.SIZE : KeyId.SIZE + size]
        if len(payload) < size:
            raise ValueError(
                f"buffer too short for value of key ID 0x{key_id:08X}: "
                f"need {size} bytes, got {len(payload)}"
            )
        return cls(name, _decode(value_type_for(name), payload))

    def to_bytes(self) -> bytes:
        """The key id followed by the value, both little-endian."""
        key = self.key()
        return key.value.to_bytes(KeyId.SIZE, "little") + _encode(
            value_type_for(self.name), self.value
        )

    def extend_to(self, buf: MutableSequence[int]) -> int:
        """Append the key/value bytes to buf; return how many were appended."""
        data = self.to_bytes()
        buf.extend(data)
        return len(data)

    def write_to(self, buf: MutableSequence[int]) -> int:
        """Write the key/value bytes at the start of buf; return how many were written."""
        data = self.to_bytes()
        if len(buf) < len(data):
            raise ValueError(f"buffer of {len(buf)} bytes cannot hold {len(data)} bytes")
        buf[: len(data)] = data
        return len(data)