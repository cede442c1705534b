import struct
from typing import Optional

from .exceptions import FramingOverrunException


class ScriptReader:
    """Little-endian cursor over an immutable buffer.

    Every read is checked against ``end``, so a reader created for a code
    region or a nested block can never consume bytes outside it.
    """

    def __init__(self, data: bytes, position: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(data)
        if position < 0 or end < position or end > len(data):
            raise FramingOverrunException(position, end - position, len(data))

        self.data = data
        self.position = position
        self.end = end

    @property
    def remaining(self) -> int:
        return self.end - self.position

    @property
    def at_end(self) -> bool:
        return self.position >= self.end

    def _take(self, size: int) -> bytes:
        start = self.position
        if size < 0 or start + size > self.end:
            raise FramingOverrunException(start, size, self.end)
        self.position = start + size
        return self.data[start : start + size]

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_uint16(self) -> int:
        return struct.unpack("<H", self._take(2))[0]

    def read_int32(self) -> int:
        return struct.unpack("<i", self._take(4))[0]

    def read_bytes(self, count: int) -> bytes:
        return self._take(count)
