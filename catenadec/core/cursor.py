"""Read cursor over an immutable payload."""

from __future__ import annotations

from catenadec.core.errors import BufferUnderrun


class ByteCursor:
    """A payload plus the offset of the next unread byte.

    Each decode call creates its own cursor; the offset only moves forward and
    never passes the end of the buffer.
    """

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray | list[int], offset: int = 0) -> None:
        self._data = bytes(data)
        if not 0 <= offset <= len(self._data):
            raise ValueError(f"offset {offset} outside payload of {len(self._data)} bytes")
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def __len__(self) -> int:
        return len(self._data)

    def peek(self) -> int | None:
        if self._offset >= len(self._data):
            return None
        return self._data[self._offset]

    def take(self, count: int) -> bytes:
        if count > self.remaining:
            raise BufferUnderrun(self._offset, count, self.remaining)
        start = self._offset
        self._offset += count
        return self._data[start : self._offset]
