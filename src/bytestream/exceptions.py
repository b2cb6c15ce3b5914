from __future__ import annotations

import errno
import typing

_TYPE_REDUCE_RESULT = typing.Tuple[typing.Callable[..., object], typing.Tuple[object, ...]]

# Base Exceptions


class StreamError(OSError):
    """Base exception for I/O conditions raised by this package.

    Errors raised by a wrapped source or sink are never converted into this
    type; they propagate exactly as the collaborator raised them.
    """

    pass


class CharsError(Exception):
    """Base exception for failures while decoding a byte stream as UTF-8.

    This family is disjoint from :class:`OSError` so callers can tell
    "the bytes are bad" apart from "the medium failed".
    """

    pass


# Leaf Exceptions


class EndOfStreamError(StreamError):
    """Raised by ``write_all`` when a sink accepts zero bytes while data remains."""

    def __init__(self, message: str = "failed to write whole buffer: eof reached") -> None:
        super().__init__(message)


class InvalidSeekError(StreamError):
    """Raised when a seek would move a stream to a negative position.

    Carries ``errno.EINVAL`` like the operating system's own invalid-argument
    errors.
    """

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(
            errno.EINVAL, f"invalid seek to a negative position: {position}"
        )

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.position,)


class NotUtf8Error(CharsError):
    """Raised when the stream did not contain valid UTF-8 data."""

    def __init__(self, message: str = "byte stream did not contain valid utf8") -> None:
        super().__init__(message)


class CharsReadError(CharsError):
    """Raised when the underlying source failed while a character was decoded.

    The source's exception is available as ``original_error`` and also as
    ``__cause__``.
    """

    original_error: OSError

    def __init__(self, error: OSError) -> None:
        super().__init__(str(error), error)
        self.original_error = error

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.original_error,)
