from __future__ import annotations

import io
import logging
import typing

from ._base_stream import SeekFrom
from .exceptions import InvalidSeekError
from .stream import RawSink, RawSource
from .util.typing import _TYPE_BUFFER, _TYPE_DATA
from .util.util import to_view

log = logging.getLogger(__name__)

_TYPE_STORAGE = typing.Union[bytes, bytearray, memoryview]


class StorageKind:
    # Read-only slice, e.g. ``bytes``.
    FIXED = "fixed"
    # Writable memoryview: overwritable in place, never resized.
    FIXED_MUTABLE = "fixed-mutable"
    # ``bytearray``: grows on writes past its end.
    GROWABLE = "growable"


def _storage_kind(storage: _TYPE_STORAGE) -> str:
    if isinstance(storage, bytearray):
        return StorageKind.GROWABLE
    with memoryview(storage) as view:
        if view.readonly:
            return StorageKind.FIXED
    if isinstance(storage, memoryview):
        return StorageKind.FIXED_MUTABLE
    raise TypeError(
        f"writable storage must be a bytearray or a memoryview, "
        f"not {type(storage).__name__}"
    )


class Cursor(RawSource, RawSink):
    """
    In-memory stream giving seek, read and write over a byte buffer.

    What the cursor can do depends on the storage it is given:

    * ``bytes`` (or any read-only buffer): read and seek.
    * a writable ``memoryview``: read, seek, and overwrite in place. Writes stop
      at the end of the view.
    * a ``bytearray``: read, seek, and write. Writes past the end grow the
      array, zero-filling any gap left by seeking beyond it.

    The storage is not copied. Modifying it through another reference while the
    cursor is in use is the caller's responsibility.

    :param storage:
        The buffer to wrap. The position starts at 0.
    """

    def __init__(self, storage: _TYPE_STORAGE) -> None:
        self._kind = _storage_kind(storage)
        self._storage = storage
        # Flat byte view of fixed storage. Growable storage is used as is.
        self._buffer: bytearray | memoryview
        if self._kind == StorageKind.GROWABLE:
            self._buffer = typing.cast(bytearray, storage)
        else:
            self._buffer = to_view(storage)
        self._pos = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self._kind}, "
            f"len={len(self._buffer)}, position={self._pos})"
        )

    @property
    def storage(self) -> _TYPE_STORAGE:
        """The wrapped buffer."""
        return self._storage

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def position(self) -> int:
        return self._pos

    @position.setter
    def position(self, value: int) -> None:
        if value < 0:
            raise InvalidSeekError(value)
        self._pos = value

    def tell(self) -> int:
        return self._pos

    def getvalue(self) -> bytes:
        """Return a copy of the entire storage, regardless of position."""
        return bytes(self._buffer)

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return self._kind != StorageKind.FIXED

    def seekable(self) -> bool:
        return True

    def seek(self, offset: int, whence: int = SeekFrom.START) -> int:
        """
        Move to ``offset`` relative to ``whence`` and return the new position.

        Seeking past the end is allowed and leaves the storage untouched.

        :raises InvalidSeekError:
            If the resulting position would be negative.
        """
        if whence == SeekFrom.START:
            pos = offset
        elif whence == SeekFrom.END:
            pos = len(self._buffer) + offset
        elif whence == SeekFrom.CURRENT:
            pos = self._pos + offset
        else:
            raise ValueError(f"invalid whence ({whence!r})")

        if pos < 0:
            raise InvalidSeekError(pos)
        self._pos = pos
        return pos

    def readinto(self, buffer: _TYPE_BUFFER) -> int:
        if self._pos > len(self._buffer):
            return 0

        view = to_view(buffer)
        with memoryview(self._buffer) as storage:
            amount = min(len(view), len(storage) - self._pos)
            view[:amount] = storage[self._pos : self._pos + amount]
        self._pos += amount
        return amount

    def write(self, data: _TYPE_DATA) -> int:
        if self._kind == StorageKind.GROWABLE:
            if data is self._storage:
                # Growing an array from a view of itself is refused.
                data = bytes(data)
            return self._write_growable(to_view(data))
        if self._kind == StorageKind.FIXED_MUTABLE:
            return self._write_fixed(to_view(data))
        raise io.UnsupportedOperation("write to a read-only cursor")

    def _write_fixed(self, data: memoryview) -> int:
        storage = typing.cast(memoryview, self._buffer)
        if self._pos >= len(storage):
            return 0

        amount = min(len(data), len(storage) - self._pos)
        storage[self._pos : self._pos + amount] = data[:amount]
        self._pos += amount
        return amount

    def _write_growable(self, data: memoryview) -> int:
        storage = typing.cast(bytearray, self._buffer)
        pos = self._pos
        length = len(storage)

        if pos == length:
            storage += data
        else:
            if pos > length:
                log.debug("Zero-filling %d bytes before offset %d", pos - length, pos)
                storage.extend(bytes(pos - length))
            # Overwrites storage[pos:] and appends whatever does not fit.
            storage[pos : pos + len(data)] = data

        self._pos = pos + len(data)
        return len(data)

    def fill_buf(self) -> memoryview:
        """
        Return the unread part of the storage without consuming it.

        For a ``bytearray`` the returned view must be released before the
        next write that grows the array, as Python refuses to resize an array
        with live views. The same goes for writing such a view back into this
        cursor; write ``bytes(view)`` instead.
        """
        view = memoryview(self._buffer)
        if self._pos < len(view):
            return view[self._pos :]
        return view[:0]

    def consume(self, amount: int) -> None:
        self._pos += amount
