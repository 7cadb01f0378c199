"""UBX framing: sync characters, checksums, requests and packet matching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable

SYNC_CHAR_1 = 0xB5
SYNC_CHAR_2 = 0x62
MAX_PAYLOAD_LEN = 1240


def ubx_checksum(data: Iterable[int]) -> tuple[int, int]:
    """Return (ck_a, ck_b) over data, which starts with the class byte."""
    calc = ChecksumCalc()
    calc.update(data)
    return calc.result()


class ChecksumCalc:
    """Incremental UBX checksum (8-bit Fletcher)."""

    def __init__(self) -> None:
        self.ck_a = 0
        self.ck_b = 0

    def update(self, chunk: Iterable[int]) -> None:
        a, b = self.ck_a, self.ck_b
        for byte in chunk:
            a = (a + byte) & 0xFF
            b = (b + a) & 0xFF
        self.ck_a, self.ck_b = a, b

    def result(self) -> tuple[int, int]:
        return self.ck_a, self.ck_b


@dataclass(frozen=True)
class UnknownPacket:
    """A packet whose class and id have no dedicated decoder."""

    payload: bytes
    class_id: int
    msg_id: int


@dataclass(frozen=True)
class PacketRequest:
    """A poll request for a packet with the given class and id."""

    PACKET_LEN: ClassVar[int] = 8

    req_class: int
    req_id: int

    @classmethod
    def request_for_unknown(cls, req_class: int, req_id: int) -> PacketRequest:
        return cls(req_class, req_id)

    def into_packet_bytes(self) -> bytes:
        body = bytes([self.req_class, self.req_id, 0, 0])
        ck_a, ck_b = ubx_checksum(body)
        return bytes([SYNC_CHAR_1, SYNC_CHAR_2]) + body + bytes([ck_a, ck_b])


def match_packet(class_id: int, msg_id: int, payload: bytes) -> UnknownPacket:
    """Decode a packet payload given its class and message id."""
    return UnknownPacket(payload=bytes(payload), class_id=class_id, msg_id=msg_id)