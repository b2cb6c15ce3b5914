from __future__ import annotations

import enum
import os
import typing

from .util.typing import _TYPE_BUFFER, _TYPE_DATA


class SeekFrom(enum.IntEnum):
    """Reference point of a seek.

    The values match ``os.SEEK_SET``, ``os.SEEK_CUR`` and ``os.SEEK_END`` so
    regular file objects accept them unchanged.
    """

    START = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END


@typing.runtime_checkable
class ByteSource(typing.Protocol):
    """Anything bytes can be pulled out of.

    ``readinto`` fills ``buffer`` with up to ``len(buffer)`` bytes and returns
    how many it wrote. A return value of 0 means end of stream. A source that
    cannot produce bytes right now must raise rather than return 0. Bytes of
    ``buffer`` past the returned count carry no meaning.
    """

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        ...


@typing.runtime_checkable
class ByteSink(typing.Protocol):
    """Anything bytes can be pushed into.

    ``write`` makes a single attempt and returns how much of ``data`` it
    consumed; a short count is not an error. If ``write`` raises, no byte of
    ``data`` was consumed.
    """

    def write(self, data: _TYPE_DATA) -> int:
        ...

    def flush(self) -> None:
        ...


@typing.runtime_checkable
class SeekableStream(typing.Protocol):
    def seek(self, offset: int, whence: int = SeekFrom.START) -> int:
        ...


@typing.runtime_checkable
class BufferedSource(ByteSource, typing.Protocol):
    """A source with an internal buffer that can be peeked at.

    ``fill_buf`` returns the unconsumed bytes without consuming them; an empty
    result means end of stream. ``consume(amount)`` marks bytes as read and
    must not exceed the length of the last ``fill_buf`` result.
    """

    def fill_buf(self) -> memoryview:
        ...

    def consume(self, amount: int) -> None:
        ...
