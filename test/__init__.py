from __future__ import annotations

import errno

from bytestream import RawSink, RawSource
from bytestream.util import to_view
from bytestream.util.typing import _TYPE_BUFFER, _TYPE_DATA


class ChunkedSource(RawSource):
    """Serves ``data`` at most ``chunk_size`` bytes per read."""

    def __init__(self, data: bytes, chunk_size: int) -> None:
        self.data = data
        self.chunk_size = chunk_size
        self.offset = 0
        self.reads = 0

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        self.reads += 1
        view = to_view(buffer)
        chunk = self.data[self.offset : self.offset + min(len(view), self.chunk_size)]
        view[: len(chunk)] = chunk
        self.offset += len(chunk)
        return len(chunk)


class FailingSource(RawSource):
    """Serves ``data`` in one read, then raises ``error`` on every later read."""

    def __init__(self, data: bytes = b"", error: OSError | None = None) -> None:
        self.data = data
        self.error = error or OSError(errno.EIO, "source broke")
        self.reads = 0

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        self.reads += 1
        if not self.data:
            raise self.error
        view = to_view(buffer)
        amount = min(len(view), len(self.data))
        view[:amount] = self.data[:amount]
        self.data = self.data[amount:]
        return amount


class ShortSink(RawSink):
    """Keeps at most ``chunk_size`` bytes per write and at most ``capacity`` overall."""

    def __init__(self, chunk_size: int, capacity: int | None = None) -> None:
        self.chunk_size = chunk_size
        self.capacity = capacity
        self.data = bytearray()
        self.writes = 0

    def write(self, data: _TYPE_DATA) -> int:
        self.writes += 1
        amount = min(len(to_view(data)), self.chunk_size)
        if self.capacity is not None:
            amount = min(amount, self.capacity - len(self.data))
        self.data += to_view(data)[:amount]
        return amount


class FailingSink(RawSink):
    """Raises on every write and, optionally, on flush."""

    def __init__(self, error: OSError | None = None, fail_flush: bool = False) -> None:
        self.error = error or OSError(errno.EPIPE, "sink broke")
        self.fail_flush = fail_flush
        self.flushes = 0

    def write(self, data: _TYPE_DATA) -> int:
        raise self.error

    def flush(self) -> None:
        self.flushes += 1
        if self.fail_flush:
            raise self.error


class RecordingSink(RawSink):
    """Accepts everything and counts flushes."""

    def __init__(self) -> None:
        self.data = bytearray()
        self.flushes = 0

    def write(self, data: _TYPE_DATA) -> int:
        self.data += to_view(data)
        return len(to_view(data))

    def flush(self) -> None:
        self.flushes += 1
