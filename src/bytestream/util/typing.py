from __future__ import annotations

from typing import Union

# Anything ``memoryview`` accepts. Read-only objects are fine for writing out.
_TYPE_DATA = Union[bytes, bytearray, memoryview]

# Destination of a read: must be writable in place.
_TYPE_BUFFER = Union[bytearray, memoryview]
