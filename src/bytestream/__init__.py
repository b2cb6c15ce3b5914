"""
Composable byte streams: sources, sinks, an in-memory cursor and adaptors.
"""

from __future__ import annotations

# Set default logging handler to avoid "No handler found" warnings.
import logging
import typing
from logging import NullHandler

from . import exceptions
from ._base_stream import BufferedSource, ByteSink, ByteSource, SeekableStream, SeekFrom
from ._version import __version__
from .cursor import Cursor
from .decoding import Bytes, Chars
from .stream import (
    Broadcast,
    Chain,
    Discard,
    Empty,
    RawSink,
    RawSource,
    Repeat,
    Take,
    Tee,
    discard,
    empty,
    repeat,
)
from .util.transfer import DEFAULT_BUFFER_SIZE, copy, read_to_end, write_all

__license__ = "MIT"
__version__ = __version__

__all__ = (
    "DEFAULT_BUFFER_SIZE",
    "Broadcast",
    "BufferedSource",
    "ByteSink",
    "ByteSource",
    "Bytes",
    "Chain",
    "Chars",
    "Cursor",
    "Discard",
    "Empty",
    "RawSink",
    "RawSource",
    "Repeat",
    "SeekFrom",
    "SeekableStream",
    "Take",
    "Tee",
    "add_stderr_logger",
    "copy",
    "discard",
    "empty",
    "exceptions",
    "read_to_end",
    "repeat",
    "write_all",
)

logging.getLogger(__name__).addHandler(NullHandler())


def add_stderr_logger(
    level: int = logging.DEBUG,
) -> logging.StreamHandler[typing.TextIO]:
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    # This method needs to be in this __init__.py to get the __name__ correct
    # even if bytestream is vendored within another package.
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


# ... Clean up.
del NullHandler
