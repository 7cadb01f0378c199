import pytest

from ubxproto.packets import (
    MAX_PAYLOAD_LEN,
    SYNC_CHAR_1,
    SYNC_CHAR_2,
    ChecksumCalc,
    PacketRequest,
    UnknownPacket,
    match_packet,
    ubx_checksum,
)


def test_checksum_empty():
    assert ubx_checksum(b"") == (0, 0)


def test_checksum_calc_incremental_matches_whole():
    data = bytes([0x06, 0x01, 0x03, 0x00, 0x01, 0x02, 0x01])
    calc = ChecksumCalc()
    calc.update(data[:3])
    calc.update(data[3:])
    assert calc.result() == ubx_checksum(data)
    assert calc.result() == (0x0E, 0x47)


def test_checksum_wraps_bytes():
    ck_a, ck_b = ubx_checksum(bytes([0xFF] * 300))
    assert 0 <= ck_a <= 0xFF
    assert 0 <= ck_b <= 0xFF


def test_request_packet_bytes():
    req = PacketRequest.request_for_unknown(0x05, 0x01)
    packet = req.into_packet_bytes()
    assert packet == bytes([0xB5, 0x62, 0x05, 0x01, 0x00, 0x00, 0x06, 0x17])
    assert len(packet) == PacketRequest.PACKET_LEN


def test_request_packet_framing_invariants():
    packet = PacketRequest.request_for_unknown(0x06, 0x01).into_packet_bytes()
    assert packet[0] == SYNC_CHAR_1
    assert packet[1] == SYNC_CHAR_2
    assert (packet[6], packet[7]) == ubx_checksum(packet[2:6])


def test_match_packet_unknown():
    packet = match_packet(0x05, 0x01, b"")
    assert packet == UnknownPacket(payload=b"", class_id=0x05, msg_id=0x01)


def test_match_packet_keeps_payload():
    packet = match_packet(0x10, 0x02, bytearray([1, 2, 3]))
    assert packet.payload == b"\x01\x02\x03"
    assert (packet.class_id, packet.msg_id) == (0x10, 0x02)


def test_match_packet_accepts_large_payload():
    payload = bytes(range(256)) * 4 + bytes(216)
    packet = match_packet(0x7F, 0x7F, payload)
    assert len(packet.payload) == 1240
    assert len(packet.payload) <= MAX_PAYLOAD_LEN
    assert packet.payload == payload