from __future__ import annotations

import typing

from .exceptions import CharsReadError, NotUtf8Error
from .util.util import utf8_char_width

if typing.TYPE_CHECKING:
    from ._base_stream import ByteSource


class Bytes:
    """
    Iterator over the bytes of a source, one ``readinto`` call per byte.

    Iteration stops at the first zero-length read. An error raised by the
    source propagates out of ``__next__``; whether later calls fail again is
    up to the source.
    """

    def __init__(self, inner: ByteSource) -> None:
        self.inner = inner
        self._buf = bytearray(1)

    def __iter__(self) -> Bytes:
        return self

    def __next__(self) -> int:
        if self.inner.readinto(self._buf) == 0:
            raise StopIteration
        return self._buf[0]


class Chars:
    """
    Iterator decoding a source as UTF-8, one character at a time.

    Each item is a one-character ``str``. Invalid data raises
    :class:`~bytestream.exceptions.NotUtf8Error` and a failing source raises
    :class:`~bytestream.exceptions.CharsReadError`; in both cases iteration may
    continue afterwards, starting with whatever byte the source yields next.
    Bytes that make up an invalid sequence are discarded.
    """

    def __init__(self, inner: ByteSource) -> None:
        self.inner = inner
        self._scratch = bytearray(4)

    def __iter__(self) -> Chars:
        return self

    def __next__(self) -> str:
        scratch = memoryview(self._scratch)
        if self._read(scratch[:1]) == 0:
            raise StopIteration

        lead = scratch[0]
        width = utf8_char_width(lead)
        if width == 1:
            return chr(lead)
        if width == 0:
            raise NotUtf8Error()

        start = 1
        while start < width:
            length = self._read(scratch[start:width])
            if length == 0:
                # Source ran dry in the middle of a sequence.
                raise NotUtf8Error()
            start += length

        try:
            return bytes(scratch[:width]).decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotUtf8Error() from e

    def _read(self, buffer: memoryview) -> int:
        try:
            return self.inner.readinto(buffer)
        except OSError as e:
            raise CharsReadError(e) from e
