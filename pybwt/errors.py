#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import typing as T


class InvalidInput(ValueError):
    """Raised for a missing or empty block, an out-of-range index or rank,
    or a truncated framed stream."""


class PreconditionViolation(ValueError):
    """Raised when the caller-declared block length and the supplied last
    column disagree."""


BlockLike = T.Union[bytes, bytearray, memoryview, str]


def as_block(data: T.Optional[BlockLike]) -> bytes:
    """Return data as an immutable bytes block.

    A str is accepted as extended ASCII, so every character must fit in a
    byte.  Nothing else is coerced.
    """
    if data is None:
        raise InvalidInput("block is undefined")
    if isinstance(data, str):
        try:
            block = data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InvalidInput(
                f"character {data[e.start]!r} at {e.start} is not extended ASCII"
            ) from e
    elif isinstance(data, (bytes, bytearray, memoryview)):
        block = bytes(data)
    else:
        raise InvalidInput(f"unsupported block type {type(data).__name__}")
    if not block:
        raise InvalidInput("block is empty")
    return block
