#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).
#
# Circular suffix sorting: order all n cyclic rotations of a block without
# building any of them.  Rotation p is read as doubled[p:p + n], where
# doubled is the block written out twice, so no modular arithmetic is
# needed in the inner loops.

import typing as T

from pybwt.errors import BlockLike, InvalidInput, as_block
from pybwt.log import log

R = 256  # extended ASCII alphabet size
CUTOFF = 15  # cutoff to insertion sort
STALL_LIMIT = 8  # stalled radix levels before ranking whole rotations


def compare_rotations(block: BlockLike, v: int, w: int) -> int:
    """Three-way comparison of rotations v and w of block.

    Returns -1, 0 or 1.  All n characters are compared; rotations that
    are equal character for character fall back to their start index,
    which is the same tie-break circular_sort() uses.
    """
    s = as_block(block)
    n = len(s)
    for x in (v, w):
        if not 0 <= x < n:
            raise InvalidInput(f"rotation {x} outside [0, {n})")
    doubled = s + s
    a = doubled[v : v + n]
    b = doubled[w : w + n]
    if a != b:
        return -1 if a < b else 1
    return (v > w) - (v < w)


def _less(doubled: bytes, n: int, v: int, w: int, d: int) -> bool:
    # rotations v and w already agree on their first d characters;
    # compare in growing chunks so an early mismatch copies little
    step = 64
    while d < n:
        e = min(d + step, n)
        a = doubled[v + d : v + e]
        b = doubled[w + d : w + e]
        if a != b:
            return a < b
        d = e
        step <<= 1
    return v < w


def _insertion(doubled: bytes, n: int, idx: T.List[int], lo: int, hi: int, d: int) -> None:
    for i in range(lo + 1, hi):
        j = i
        while j > lo and _less(doubled, n, idx[j], idx[j - 1], d):
            idx[j], idx[j - 1] = idx[j - 1], idx[j]
            j -= 1


def _rotation_ranks(doubled: bytes, n: int) -> T.List[int]:
    """Rank every rotation of the block by prefix doubling.

    After the round for k, rank[p] orders rotation p by its first 2k
    characters.  Rounds stop once every rank is distinct or k reaches n,
    at which point equal ranks mean equal rotations.
    """
    rank = list(doubled[:n])
    width = R
    k = 1
    while k < n:
        wrapped = rank + rank
        keys = [wrapped[p] * width + wrapped[p + k] for p in range(n)]
        order = sorted(range(n), key=keys.__getitem__)
        r = 0
        prev = keys[order[0]]
        for p in order:
            if keys[p] != prev:
                r += 1
                prev = keys[p]
            rank[p] = r
        width = r + 1
        k <<= 1
        if width == n:
            break
    return rank


def circular_sort(block: BlockLike, cutoff: int = CUTOFF) -> T.List[int]:
    """Return the permutation of range(n) that sorts the cyclic rotations
    of block.

    MSD radix sort driven by a stack of (lo, hi, depth, stalls) ranges of
    the index array.  Each range is bucketed by key-indexed counting on
    the character at offset depth of every rotation, and every
    non-trivial bucket is pushed back with depth + 1.  Small ranges are
    finished by insertion sort.

    A level that peels at most one rotation off a range is a stall.  Long
    runs of one byte and periodic blocks stall on every level, so after
    STALL_LIMIT of them in a row the range is finished from whole-rotation
    ranks instead, with the rotation index breaking ties between
    identical rotations.
    """
    s = as_block(block)
    n = len(s)
    doubled = s + s
    idx = list(range(n))
    aux = [0] * n  # scatter buffer, reused by every range
    ranks: T.Optional[T.List[int]] = None
    stack = [(0, n, 0, 0)]
    passes = 0

    while stack:
        lo, hi, d, stalls = stack.pop()
        if hi - lo <= 1:
            continue
        if d >= n:
            idx[lo:hi] = sorted(idx[lo:hi])
            continue
        if hi - lo <= cutoff:
            _insertion(doubled, n, idx, lo, hi, d)
            continue
        if stalls >= STALL_LIMIT:
            if ranks is None:
                ranks = _rotation_ranks(doubled, n)
                log("circular_sort: ranked rotations for a stalled range at depth", d)
            idx[lo:hi] = sorted(idx[lo:hi], key=lambda p: (ranks[p], p))
            continue

        # compute frequency counts
        count = [0] * (R + 1)
        for i in range(lo, hi):
            count[doubled[idx[i] + d] + 1] += 1

        largest = max(count)
        if largest == hi - lo:
            # one bucket holds everything, nothing to move at this depth
            stack.append((lo, hi, d + 1, stalls + 1))
            continue
        stalls = stalls + 1 if largest >= hi - lo - 1 else 0

        # transform counts to bucket starts
        for r in range(R):
            count[r + 1] += count[r]

        # distribute
        cursor = count[:]
        for i in range(lo, hi):
            p = idx[i]
            c = doubled[p + d]
            aux[cursor[c]] = p
            cursor[c] += 1
        idx[lo:hi] = aux[: hi - lo]
        passes += 1

        for r in range(R - 1, -1, -1):
            if count[r + 1] - count[r] > 1:
                stack.append((lo + count[r], lo + count[r + 1], d + 1, stalls))

    log("circular_sort: n", n, "counting passes", passes)
    return idx


class CircularSuffixArray:
    """Sorted order of the cyclic rotations of a block, queried by rank."""

    def __init__(self, block: BlockLike) -> None:
        self.block = as_block(block)
        self.sorted_idx = circular_sort(self.block)

    def length(self) -> int:
        return len(self.block)

    def index(self, i: int) -> int:
        """Return the start of the ith smallest rotation."""
        if not 0 <= i < len(self.sorted_idx):
            raise InvalidInput(f"index {i} outside [0, {len(self.sorted_idx)})")
        return self.sorted_idx[i]

    def __len__(self) -> int:
        return len(self.block)

    def __iter__(self) -> T.Iterator[int]:
        return iter(self.sorted_idx)

    def __repr__(self) -> str:
        return f"CircularSuffixArray(n={len(self.block)})"
