#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).
#
# Burrows-Wheeler transform.  The forward direction takes the last column
# of the sorted rotation matrix; the reverse direction rebuilds the block
# from that column and the row of the original rotation in linear time.

import typing as T

from pybwt.errors import BlockLike, InvalidInput, PreconditionViolation, as_block
from pybwt.log import log
from pybwt.suffix import R, circular_sort


def bwt_encode(block: BlockLike) -> T.Tuple[int, bytes]:
    """Return (first, last) for block.

    last[i] is the character just before the ith smallest rotation, and
    first is the row holding the unrotated block.
    """
    s = as_block(block)
    n = len(s)
    sorted_idx = circular_sort(s)

    first = -1
    last = bytearray(n)
    for i, p in enumerate(sorted_idx):
        # s[-1] wraps round for the unrotated block
        last[i] = s[p - 1]
        if p == 0:
            first = i
    log("bwt_encode: n", n, "first", first)
    return first, bytes(last)


def bwt_pointers(L: bytes) -> T.Tuple[T.List[int], bytes]:
    """Build the successor array and the first column from last column L.

    Key-indexed counting: base[c] is where symbol c starts in the stably
    sorted copy of L, which is the first column.  Walking L in order and
    handing out those slots gives pointers[r], the row that follows row r
    in the original block.
    """
    count = [0] * (R + 1)
    for symbol in L:
        count[symbol + 1] += 1
    for r in range(R):
        count[r + 1] += count[r]

    base = count[:R]
    pointers = [-1] * len(L)
    F = bytearray(len(L))
    for i, symbol in enumerate(L):
        pointers[base[symbol]] = i
        F[base[symbol]] = symbol
        base[symbol] += 1
    return pointers, bytes(F)


def bwt_decode(first: int, last: BlockLike, length: T.Optional[int] = None) -> bytes:
    """Invert bwt_encode().

    length, when given, is the block length the caller read from its own
    framing; it has to agree with len(last).
    """
    L = as_block(last)
    n = len(L)
    if length is not None and length != n:
        raise PreconditionViolation(
            f"declared length {length} but last column has {n} bytes"
        )
    if isinstance(first, bool) or not isinstance(first, int):
        raise InvalidInput(f"first must be an int, not {type(first).__name__}")
    if not 0 <= first < n:
        raise InvalidInput(f"first {first} outside [0, {n})")

    pointers, F = bwt_pointers(L)

    out = bytearray(n)
    row = first
    for i in range(n):
        out[i] = F[row]
        row = pointers[row]
    log("bwt_decode: n", n, "first", first)
    return bytes(out)
