from __future__ import annotations

from .transfer import DEFAULT_BUFFER_SIZE, copy, read_to_end, write_all
from .util import to_view, utf8_char_width

__all__ = (
    "DEFAULT_BUFFER_SIZE",
    "copy",
    "read_to_end",
    "to_view",
    "utf8_char_width",
    "write_all",
)
