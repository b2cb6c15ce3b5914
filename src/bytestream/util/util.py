from __future__ import annotations

from .typing import _TYPE_DATA


def to_view(data: _TYPE_DATA) -> memoryview:
    """Returns a flat, byte-addressed view over any buffer-protocol object."""
    if isinstance(data, memoryview) and data.format == "B" and data.ndim == 1:
        return data
    return memoryview(data).cast("B")


def utf8_char_width(byte: int) -> int:
    """
    Number of bytes in the UTF-8 sequence that ``byte`` starts.

    Returns 0 when ``byte`` can never start a sequence: continuation bytes,
    the overlong leads ``0xC0``/``0xC1`` and anything above ``0xF4``.
    """
    if byte < 0x80:
        return 1
    if byte < 0xC2:
        return 0
    if byte < 0xE0:
        return 2
    if byte < 0xF0:
        return 3
    if byte < 0xF5:
        return 4
    return 0
