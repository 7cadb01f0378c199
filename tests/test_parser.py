import pytest

from ubxproto.buffers import FixedLinearBuffer
from ubxproto.errors import InvalidChecksumError, OutOfMemoryError, ParserError
from ubxproto.packets import ubx_checksum
from ubxproto.parser import Parser

FULL_ACK_ACK_PACK = bytes([0xB5, 0x62, 0x5, 0x1, 0x2, 0x0, 0x6, 0x1, 0xF, 0x38])
SMALL_ACK_ACK = bytes([0xB5, 0x62, 0x5, 0x1, 0x2, 0x0, 0x4, 0x5, 0x11, 0x38])


def frame(class_id, msg_id, payload):
    body = bytes([class_id, msg_id, len(payload) & 0xFF, len(payload) >> 8]) + payload
    ck_a, ck_b = ubx_checksum(body)
    return b"\xb5\x62" + body + bytes([ck_a, ck_b])


LARGE_PACKET = frame(0x06, 0x24, bytes([0x17]) * 36)


def collect(it):
    out = []
    while True:
        try:
            packet = next(it)
        except StopIteration:
            return out
        except ParserError as err:
            out.append(err)
            continue
        out.append((packet.class_id, packet.msg_id, packet.payload))


ACK = (5, 1, bytes([6, 1]))


def test_parse_empty_buffer():
    parser = Parser()
    assert parser.is_buffer_empty()
    assert collect(parser.consume(b"")) == []
    assert parser.is_buffer_empty()


def test_parse_ack_ack_byte_by_byte():
    parser = Parser()
    for b in FULL_ACK_ACK_PACK[:-1]:
        assert collect(parser.consume(bytes([b]))) == []
        assert not parser.is_buffer_empty()
    assert collect(parser.consume(FULL_ACK_ACK_PACK[-1:])) == [ACK]
    assert parser.is_buffer_empty()


def test_parse_ack_ack_in_one_go():
    parser = Parser()
    assert collect(parser.consume(FULL_ACK_ACK_PACK)) == [ACK]
    assert parser.is_buffer_empty()


def test_parse_ack_ack_bad_checksum():
    parser = Parser()
    bad_pack = bytearray(FULL_ACK_ACK_PACK)
    bad_pack[-3] = 5
    assert collect(parser.consume(bytes(bad_pack))) == [
        InvalidChecksumError(expect=0x380F, got=0x3C13)
    ]
    assert parser.buffer_len() == 0

    assert collect(parser.consume(FULL_ACK_ACK_PACK * 2)) == [ACK, ACK]
    assert parser.is_buffer_empty()


def test_parse_ack_ack_parted_two_packets():
    parser = Parser()
    assert collect(parser.consume(FULL_ACK_ACK_PACK[0:5])) == []
    assert parser.buffer_len() == 5
    rest_and_next = FULL_ACK_ACK_PACK[5:] + FULL_ACK_ACK_PACK
    assert collect(parser.consume(rest_and_next)) == [ACK, ACK]
    assert parser.is_buffer_empty()


def test_parse_ack_ack_two_in_one_go():
    parser = Parser()
    assert collect(parser.consume(FULL_ACK_ACK_PACK * 2)) == [ACK, ACK]
    assert parser.is_buffer_empty()


def test_parse_ack_ack_garbage_before():
    parser = Parser()
    garbage = bytes([0x00, 0x06, 0x01, 0x0F, 0x38]) + FULL_ACK_ACK_PACK
    assert collect(parser.consume(garbage)) == [ACK]
    assert parser.is_buffer_empty()

    garbage = bytes([0xB5, 0xB5, 0x62, 0x62, 0x38]) + FULL_ACK_ACK_PACK
    assert collect(parser.consume(garbage)) == [ACK]
    assert parser.is_buffer_empty()


def test_zero_sized_ackack():
    parser = Parser()
    it = parser.consume(bytes([0xB5, 0x62, 0x05, 0x01, 0x00, 0x00, 0x06, 0x17]))
    packet = next(it)
    assert (packet.class_id, packet.msg_id, packet.payload) == (5, 1, b"")
    with pytest.raises(StopIteration):
        next(it)


def test_double_start_at_end():
    data = bytes([0xB5, 0x62, 0xB5, 0x62, 0x05, 0x01, 0x00, 0x00, 0x06, 0x17])
    parser = Parser(FixedLinearBuffer(10))
    for byte in data:
        parser.consume(bytes([byte]))

    it = parser.consume(SMALL_ACK_ACK)
    with pytest.raises(OutOfMemoryError):
        next(it)
    packet = next(it)
    assert (packet.class_id, packet.msg_id, packet.payload) == (5, 1, b"")
    packet = next(it)
    assert (packet.class_id, packet.msg_id, packet.payload) == (5, 1, bytes([4, 5]))
    with pytest.raises(StopIteration):
        next(it)

    assert collect(parser.consume(SMALL_ACK_ACK)) == [(5, 1, bytes([4, 5]))]


def test_parser_oom_processes_multiple_small_packets():
    parser = Parser(FixedLinearBuffer(10))
    results = collect(parser.consume(SMALL_ACK_ACK * 5))
    assert results == [(5, 1, bytes([4, 5]))] * 5


def test_parser_handle_garbage_first_byte():
    parser = Parser(FixedLinearBuffer(12))
    data = bytes([0xB5]) + SMALL_ACK_ACK
    assert collect(parser.consume(data)) == [(5, 1, bytes([4, 5]))]


def test_parser_oom_clears_buffer():
    parser = Parser(FixedLinearBuffer(12))
    assert collect(parser.consume(LARGE_PACKET[0:8])) == []
    assert parser.buffer_len() == 8

    results = collect(parser.consume(LARGE_PACKET[8:]))
    assert results == [OutOfMemoryError(len(LARGE_PACKET) - 6)]
    assert parser.is_buffer_empty()

    assert collect(parser.consume(SMALL_ACK_ACK)) == [(5, 1, bytes([4, 5]))]


def test_parser_accepts_packet_array_underlying():
    parser = Parser(FixedLinearBuffer(1024))
    assert collect(parser.consume(LARGE_PACKET)) == [(0x06, 0x24, bytes([0x17]) * 36)]


def test_parser_accepts_packet_growable_underlying():
    parser = Parser()
    assert collect(parser.consume(LARGE_PACKET)) == [(0x06, 0x24, bytes([0x17]) * 36)]


def test_parser_accepts_multiple_packets():
    first = frame(0x06, 0x24, bytes([21]) + bytes(35))
    second = frame(0x06, 0x24, bytes([18]) + bytes(35))
    parser = Parser()
    packets = list(parser.consume(first + second))
    assert [p.payload[0] for p in packets] == [21, 18]


def test_oversized_length_is_skipped():
    parser = Parser()
    bogus = bytes([0xB5, 0x62, 0x01, 0x02, 0xFF, 0xFF])
    assert collect(parser.consume(bogus + FULL_ACK_ACK_PACK)) == [ACK]


def test_context_manager_keeps_partial_packet():
    parser = Parser()
    with parser.consume(FULL_ACK_ACK_PACK + FULL_ACK_ACK_PACK[:4]) as it:
        packet = next(it)
        assert packet.payload == bytes([6, 1])
    assert parser.buffer_len() == 4
    assert collect(parser.consume(FULL_ACK_ACK_PACK[4:])) == [ACK]


def test_closed_iterator_yields_nothing():
    parser = Parser()
    it = parser.consume(FULL_ACK_ACK_PACK)
    it.close()
    assert list(it) == []
    assert parser.buffer_len() == len(FULL_ACK_ACK_PACK)
    assert collect(parser.consume(b"")) == [ACK]