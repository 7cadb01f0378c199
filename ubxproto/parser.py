"""Streaming parser that extracts UBX packets from arbitrary chunks of bytes."""

from __future__ import annotations

from typing import Optional

from .buffers import DualBuffer, GrowableBuffer, UnderlyingBuffer
from .errors import InvalidChecksumError, OutOfMemoryError
from .packets import MAX_PAYLOAD_LEN, SYNC_CHAR_1, SYNC_CHAR_2, ChecksumCalc, match_packet


class Parser:
    """Keeps partial packets between calls to consume().

    Without a buffer, an unbounded GrowableBuffer is used. A fixed buffer
    should hold at least a few bytes; in practice it needs to fit the largest
    packet expected.
    """

    def __init__(self, buffer: Optional[UnderlyingBuffer] = None) -> None:
        self._buf = buffer if buffer is not None else GrowableBuffer()
        self._active: Optional[ParserIter] = None

    def _settle(self) -> None:
        if self._active is not None:
            self._active.close()
            self._active = None

    def is_buffer_empty(self) -> bool:
        self._settle()
        return self._buf.is_empty()

    def buffer_len(self) -> int:
        self._settle()
        return len(self._buf)

    def consume(self, data: bytes) -> ParserIter:
        """Feed new bytes; return an iterator over the packets now complete."""
        self._settle()
        view = DualBuffer(self._buf, data)
        pos = view.find(SYNC_CHAR_1)
        if pos is not None:
            view.drain(pos)
        self._active = ParserIter(view)
        return self._active


class ParserIter:
    """Iterator over packets in the parser's buffer.

    next() returns decoded packets; a bad packet raises a ParserError, after
    which iteration may continue. Unconsumed bytes are kept in the parser when
    the iterator is exhausted, closed, or the next consume() begins.
    """

    def __init__(self, view: DualBuffer) -> None:
        self._buf = view
        self._closed = False

    def __iter__(self) -> ParserIter:
        return self

    def __next__(self):
        if self._closed:
            raise StopIteration
        buf = self._buf
        while len(buf) > 0:
            pos = buf.find(SYNC_CHAR_1)
            if pos is None:
                buf.clear()
                break
            buf.drain(pos)

            if len(buf) < 2:
                break
            if buf[1] != SYNC_CHAR_2:
                buf.drain(1)
                continue
            if len(buf) < 6:
                break

            pack_len = buf[4] | (buf[5] << 8)
            if pack_len > MAX_PAYLOAD_LEN:
                buf.drain(2)
                continue

            packet = self._extract_packet(pack_len)
            if packet is None:
                break
            return packet
        self.close()
        raise StopIteration

    def _extract_packet(self, pack_len: int):
        buf = self._buf
        if not buf.can_drain_and_take(6, pack_len + 2):
            if buf.potential_lost_bytes() > 0:
                buf.drain(2)
                raise OutOfMemoryError(pack_len + 2)
            return None

        calc = ChecksumCalc()
        for part in buf.peek_raw(2, pack_len + 6):
            calc.update(part)
        ck_a, ck_b = calc.result()
        expect_a, expect_b = buf[6 + pack_len], buf[7 + pack_len]
        if (ck_a, ck_b) != (expect_a, expect_b):
            buf.drain(2)
            raise InvalidChecksumError(
                expect=expect_a | (expect_b << 8), got=ck_a | (ck_b << 8)
            )

        class_id, msg_id = buf[2], buf[3]
        buf.drain(6)
        msg_data = buf.take(pack_len + 2)
        return match_packet(class_id, msg_id, msg_data[:-2])

    def close(self) -> None:
        """Stop iterating and hand unconsumed bytes back to the parser's buffer."""
        if not self._closed:
            self._closed = True
            self._buf.commit()

    def __enter__(self) -> ParserIter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()