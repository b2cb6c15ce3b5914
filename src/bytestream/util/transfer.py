from __future__ import annotations

import logging
import typing

from ..exceptions import EndOfStreamError
from .typing import _TYPE_DATA
from .util import to_view

if typing.TYPE_CHECKING:
    from .._base_stream import ByteSink, ByteSource

log = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 64 * 1024


def write_all(sink: ByteSink, data: _TYPE_DATA) -> None:
    """
    Write the whole of ``data`` into ``sink``, calling ``write`` as many times
    as it takes.

    :raises EndOfStreamError:
        If ``sink`` accepts zero bytes while some of ``data`` is left.
    """
    view = to_view(data)
    while view:
        written = sink.write(view)
        if written == 0:
            raise EndOfStreamError()
        view = view[written:]


def copy(
    source: ByteSource, sink: ByteSink, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> int:
    """
    Copy everything ``source`` produces into ``sink`` and return the number of
    bytes copied.

    A single intermediate buffer of ``buffer_size`` bytes is reused for every
    round trip. The first error raised by either side aborts the copy; how much
    had been copied by then is not reported.
    """
    if buffer_size <= 0:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")

    buffer = bytearray(buffer_size)
    view = memoryview(buffer)
    written = 0
    while True:
        length = source.readinto(view)
        if length == 0:
            log.debug("Copied %d bytes from %r to %r", written, source, sink)
            return written
        write_all(sink, view[:length])
        written += length


def read_to_end(source: ByteSource, buffer: bytearray) -> int:
    """
    Read from ``source`` until it reports end of stream, appending to
    ``buffer``. Returns how many bytes were appended.

    ``source`` reads into a reused scratch buffer of
    :data:`DEFAULT_BUFFER_SIZE` bytes and never sees ``buffer`` itself, so a
    view kept alive by ``source`` (or by a traceback through it) cannot stop
    ``buffer`` from growing. Whatever was read before an error stays in
    ``buffer``.
    """
    scratch = memoryview(bytearray(DEFAULT_BUFFER_SIZE))
    appended = 0
    try:
        while True:
            length = source.readinto(scratch)
            if length == 0:
                return appended
            buffer += scratch[:length]
            appended += length
    except Exception:
        log.debug("Read to end aborted after %d bytes", appended)
        raise
