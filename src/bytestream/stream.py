from __future__ import annotations

import logging
import typing

from .decoding import Bytes, Chars
from .util.transfer import read_to_end, write_all
from .util.typing import _TYPE_BUFFER, _TYPE_DATA
from .util.util import to_view

if typing.TYPE_CHECKING:
    from ._base_stream import ByteSink, ByteSource

log = logging.getLogger(__name__)


class RawSource:
    """
    Base class for byte sources.

    Subclasses implement :meth:`readinto`; everything else here is built on
    top of it and works the same for every source.
    """

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        raise NotImplementedError()

    def read(self, size: int = -1) -> bytes:
        """
        Read up to ``size`` bytes with a single :meth:`readinto` call.

        A negative ``size`` reads until end of stream instead.
        """
        if size < 0:
            data = bytearray()
            read_to_end(self, data)
            return bytes(data)

        buffer = bytearray(size)
        length = self.readinto(buffer)
        del buffer[length:]
        return bytes(buffer)

    def read_to_end(self, buffer: bytearray) -> int:
        return read_to_end(self, buffer)

    def iter_bytes(self) -> Bytes:
        """Iterate over this source byte by byte."""
        return Bytes(self)

    def iter_chars(self) -> Chars:
        """Iterate over this source as UTF-8 encoded characters."""
        return Chars(self)

    def chain(self, other: ByteSource) -> Chain:
        """Read this source to its end, then continue with ``other``."""
        return Chain(self, other)

    def take(self, limit: int) -> Take:
        """Read at most ``limit`` more bytes from this source."""
        return Take(self, limit)

    def tee(self, sink: ByteSink) -> Tee:
        """Copy every byte read from this source into ``sink`` as well."""
        return Tee(self, sink)


class RawSink:
    """
    Base class for byte sinks.

    Subclasses implement :meth:`write` and, when they buffer internally,
    :meth:`flush`.
    """

    def write(self, data: _TYPE_DATA) -> int:
        raise NotImplementedError()

    def flush(self) -> None:
        pass

    def write_all(self, data: _TYPE_DATA) -> None:
        write_all(self, data)

    def write_fmt(self, format_string: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        """
        Format with :meth:`str.format` and write the UTF-8 encoded result.

        Partial writes are not reported; this either writes everything or
        raises.
        """
        self.write_all(format_string.format(*args, **kwargs).encode("utf-8"))

    def broadcast(self, other: ByteSink) -> Broadcast:
        """Write everything this sink accepts into ``other`` too."""
        return Broadcast(self, other)


# Adaptors


class Take(RawSource):
    """
    Source adaptor that stops after ``limit`` bytes.

    Reads that fail do not count towards the limit, so a later read may still
    succeed. Once the limit is used up every read returns 0 and the wrapped
    source is left alone.
    """

    def __init__(self, inner: ByteSource, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        self.inner = inner
        self._limit = limit

    @property
    def limit(self) -> int:
        """Number of bytes that may still be read."""
        return self._limit

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        view = to_view(buffer)
        cap = min(len(view), self._limit)
        if cap == 0:
            return 0
        with view[:cap] as limited:
            length = self.inner.readinto(limited)
        self._limit -= length
        return length


class Chain(RawSource):
    """
    Source adaptor yielding all of ``first`` followed by all of ``second``.

    The first zero-length read from ``first`` is taken as permanent: from then
    on only ``second`` is read, even once it is exhausted too.
    """

    def __init__(self, first: ByteSource, second: ByteSource) -> None:
        self.first = first
        self.second = second
        self.done_first = False

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        if not self.done_first:
            length = self.first.readinto(buffer)
            if length:
                return length
            log.debug("First source of %r exhausted, switching to second", self)
            self.done_first = True
        return self.second.readinto(buffer)


class Tee(RawSource):
    """
    Source adaptor that writes every byte it reads into ``sink``.

    If writing to ``sink`` fails, the read raises that error. The bytes were
    already taken from ``inner`` at that point and are lost to the caller.
    """

    def __init__(self, inner: ByteSource, sink: ByteSink) -> None:
        self.inner = inner
        self.sink = sink

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        view = to_view(buffer)
        length = self.inner.readinto(view)
        with view[:length] as filled:
            write_all(self.sink, filled)
        return length


class Broadcast(RawSink):
    """
    Sink adaptor that writes to ``primary`` and mirrors into ``secondary``.

    ``secondary`` always receives exactly the bytes ``primary`` accepted. An
    error from ``secondary`` does not tell how much ``primary`` took.
    """

    def __init__(self, primary: ByteSink, secondary: ByteSink) -> None:
        self.primary = primary
        self.secondary = secondary

    def write(self, data: _TYPE_DATA) -> int:
        view = to_view(data)
        written = self.primary.write(view)
        write_all(self.secondary, view[:written])
        return written

    def flush(self) -> None:
        # Both sides get flushed; the primary's error wins.
        try:
            self.primary.flush()
        except Exception:
            try:
                self.secondary.flush()
            except Exception:
                log.debug("Secondary flush of %r also failed", self, exc_info=True)
            raise
        self.secondary.flush()


# Trivial streams


class Empty(RawSource):
    """A source that is always at end of stream."""

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        return 0

    def __repr__(self) -> str:
        return "Empty()"


class Repeat(RawSource):
    """A source that produces the same byte forever."""

    def __init__(self, byte: int) -> None:
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte must be in range(256), got {byte}")
        self.byte = byte

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        view = to_view(buffer)
        view[:] = bytes([self.byte]) * len(view)
        return len(view)

    def __repr__(self) -> str:
        return f"Repeat({self.byte:#04x})"


class Discard(RawSink):
    """A sink that accepts everything and keeps nothing."""

    def write(self, data: _TYPE_DATA) -> int:
        return len(to_view(data))

    def __repr__(self) -> str:
        return "Discard()"


def empty() -> Empty:
    return Empty()


def repeat(byte: int) -> Repeat:
    return Repeat(byte)


def discard() -> Discard:
    return Discard()
