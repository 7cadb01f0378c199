"""Byte stores behind the streaming parser, and a view joining stored and new bytes."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Optional, Union

from .errors import OutOfMemoryError


class UnderlyingBuffer(ABC):
    """Storage the parser keeps unconsumed bytes in between calls."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every byte."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of bytes currently stored."""

    @abstractmethod
    def __getitem__(self, index: Union[int, slice]) -> Union[int, bytes]:
        """A single byte, or a copy of a range of bytes."""

    @abstractmethod
    def max_capacity(self) -> int:
        """The number of bytes the buffer is always able to hold."""

    @abstractmethod
    def extend(self, data: bytes) -> int:
        """Append data; return how many bytes did not fit."""

    @abstractmethod
    def drain(self, count: int) -> None:
        """Remove the first count bytes (all of them if count is larger)."""

    def find(self, value: int) -> Optional[int]:
        """Index of the first byte equal to value, or None."""
        return next((i for i in range(len(self)) if self[i] == value), None)

    def is_empty(self) -> bool:
        return len(self) == 0


class GrowableBuffer(UnderlyingBuffer):
    """An unbounded buffer that grows as needed."""

    def __init__(self) -> None:
        self._data = bytearray()

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: Union[int, slice]) -> Union[int, bytes]:
        if isinstance(index, slice):
            return bytes(self._data[index])
        return self._data[index]

    def max_capacity(self) -> int:
        return sys.maxsize

    def extend(self, data: bytes) -> int:
        self._data.extend(data)
        return 0

    def drain(self, count: int) -> None:
        del self._data[:count]

    def find(self, value: int) -> Optional[int]:
        pos = self._data.find(value)
        return None if pos < 0 else pos


class FixedLinearBuffer(UnderlyingBuffer):
    """A buffer of fixed capacity; bytes that do not fit are refused."""

    def __init__(self, capacity: int) -> None:
        self._buffer = bytearray(capacity)
        self._len = 0

    def clear(self) -> None:
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, index: Union[int, slice]) -> Union[int, bytes]:
        if isinstance(index, slice):
            if index.stop is not None and index.stop > self._len:
                raise IndexError(f"index {index.stop} is outside of our length {self._len}")
            return bytes(self._buffer[: self._len][index])
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError(f"index {index} is outside of our length {self._len}")
        return self._buffer[index]

    def max_capacity(self) -> int:
        return len(self._buffer)

    def extend(self, data: bytes) -> int:
        to_copy = min(len(data), len(self._buffer) - self._len)
        self._buffer[self._len : self._len + to_copy] = data[:to_copy]
        self._len += to_copy
        return len(data) - to_copy

    def drain(self, count: int) -> None:
        if count >= self._len:
            self._len = 0
            return
        new_size = self._len - count
        self._buffer[:new_size] = self._buffer[count : self._len]
        self._len = new_size


class DualBuffer:
    """Presents a stored buffer followed by newly received bytes as one sequence.

    Bytes are moved into the stored buffer only when a contiguous view needs it.
    Call commit() when done, to keep the unconsumed bytes for next time.
    """

    def __init__(self, buf: UnderlyingBuffer, new_data: bytes) -> None:
        self._buf = buf
        self._off = 0
        self._new = bytes(new_data)
        self._new_off = 0

    def _stored_left(self) -> int:
        return len(self._buf) - self._off

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise IndexError(f"index {index} out of range for {len(self)} bytes")
        if index < self._stored_left():
            return self._buf[index + self._off]
        return self._new[self._new_off + index - self._stored_left()]

    def __len__(self) -> int:
        return self._stored_left() + len(self._new) - self._new_off

    def find(self, value: int) -> Optional[int]:
        """Index of the first byte equal to value, or None."""
        head = self._buf[self._off : len(self._buf)]
        pos = head.find(value)
        if pos >= 0:
            return pos
        pos = self._new.find(value, self._new_off)
        return None if pos < 0 else len(head) + pos - self._new_off

    def clear(self) -> None:
        self.drain(len(self))

    def drain(self, count: int) -> None:
        """Discard count bytes from the front of the view."""
        stored = min(self._stored_left(), count)
        self._off += stored
        self._new_off += max(count - stored, 0)

    def potential_lost_bytes(self) -> int:
        """Bytes that would not fit in the stored buffer if committed now."""
        capacity = self._buf.max_capacity()
        return max(len(self) - capacity, 0)

    def can_drain_and_take(self, drain: int, take: int) -> bool:
        """Whether take() of take bytes would succeed after drain() of drain bytes."""
        stored = min(self._stored_left(), drain)
        drained_off = self._off + stored
        drained_new_off = self._new_off + max(drain - stored, 0)

        stored_left = len(self._buf) - drained_off
        if take > stored_left + len(self._new) - drained_new_off:
            return False

        from_stored = min(stored_left, take)
        from_new = max(take - from_stored, 0)
        if from_stored == 0 or from_new == 0:
            return True
        return from_new <= self._buf.max_capacity() - stored_left

    def peek_raw(self, start: int, end: int) -> tuple[bytes, bytes]:
        """The bytes in [start, end) as the stored part and the new part."""
        split = self._stored_left()
        if start >= split:
            head = b""
        else:
            head = self._buf[start + self._off : min(len(self._buf), end + self._off)]
        if end <= split:
            tail = b""
        else:
            tail = self._new[self._new_off + max(start - split, 0) : end - split + self._new_off]
        return head, tail

    def take(self, count: int) -> bytes:
        """Remove and return the next count bytes as one contiguous block.

        Raises IndexError if fewer than count bytes are available and
        OutOfMemoryError if the stored buffer cannot hold them contiguously.
        """
        stored = min(self._stored_left(), count)
        from_new = max(count - stored, 0)

        if from_new > len(self._new) - self._new_off:
            raise IndexError(
                f"cannot pull {from_new} bytes from a buffer with "
                f"{len(self._new)}-{self._new_off}"
            )

        if stored == 0:
            offset = self._new_off
            self._new_off += count
            return self._new[offset : offset + count]

        if from_new == 0:
            offset = self._off
            self._off += count
            return self._buf[offset : offset + count]

        capacity = self._buf.max_capacity()
        if capacity < count:
            raise OutOfMemoryError(count)

        if from_new < capacity - len(self._buf):
            remaining = self._new[self._new_off :]
            not_moved = self._buf.extend(remaining)
            self._new_off += len(remaining) - not_moved
            offset = self._off
            self._off += count
            return self._buf[offset : offset + count]

        self._buf.drain(self._off)
        self._off = 0
        self._buf.extend(self._new[self._new_off : self._new_off + from_new])
        self._new_off += from_new
        self._off = count
        return self._buf[0:count]

    def commit(self) -> None:
        """Drop consumed bytes from the store and append the unconsumed new ones."""
        self._buf.drain(self._off)
        self._buf.extend(self._new[self._new_off :])
        self._off = 0
        self._new = b""
        self._new_off = 0