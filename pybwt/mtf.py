#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import typing as T

from pybwt.errors import InvalidInput
from pybwt.log import log
from pybwt.suffix import R


class MoveToFront:
    """
    Recency list over the byte alphabet.

    rank[v] is the position of value v and symbols[p] the value at
    position p; the two always describe the same permutation.  Both start
    as the identity.  An instance belongs to a single encode or decode
    run, so each run starts from the same state.
    """

    def __init__(self, alphabet_size: int = R) -> None:
        if isinstance(alphabet_size, bool) or not isinstance(alphabet_size, int):
            raise InvalidInput(f"alphabet size must be an int, not {type(alphabet_size).__name__}")
        if not 1 <= alphabet_size <= R:
            raise InvalidInput(f"alphabet size {alphabet_size} outside [1, {R}]")
        self.alphabet_size = alphabet_size
        self.rank = list(range(alphabet_size))
        self.symbols = list(range(alphabet_size))

    def _promote(self, position: int) -> None:
        """Move the value at position to the front.  Every value ahead of
        it slides one slot later."""
        symbols = self.symbols
        rank = self.rank
        c = symbols[position]
        for p in range(position, 0, -1):
            moved = symbols[p - 1]
            symbols[p] = moved
            rank[moved] = p
        symbols[0] = c
        rank[c] = 0

    def encode_symbol(self, c: int) -> int:
        """Return the current position of c, then move c to the front."""
        _check_value("symbol", c, self.alphabet_size)
        position = self.rank[c]
        self._promote(position)
        return position

    def decode_rank(self, position: int) -> int:
        """Return the value at position, then move it to the front."""
        _check_value("rank", position, self.alphabet_size)
        c = self.symbols[position]
        self._promote(position)
        return c

    def __repr__(self) -> str:
        return f"MoveToFront(front={self.symbols[:8]})"


def _check_value(what: str, v: T.Any, size: int) -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidInput(f"{what} must be an int, not {type(v).__name__}")
    if not 0 <= v < size:
        raise InvalidInput(f"{what} {v} outside [0, {size})")


def _as_sequence(what: str, data: T.Any) -> T.Sequence[int]:
    """Bytes-like input as bytes, a str as extended ASCII, any other
    iterable as a list.  Empty input is fine here."""
    if data is None:
        raise InvalidInput(f"{what} not given")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InvalidInput(f"character at {e.start} is not extended ASCII") from e
    try:
        return list(data)
    except TypeError as e:
        raise InvalidInput(f"{what} must be iterable, not {type(data).__name__}") from e


def mtf_encode(data: T.Iterable[int], alphabet_size: int = R) -> T.List[int]:
    """Replace every byte of data with its move-to-front rank."""
    symbols = _as_sequence("data", data)
    mtf = MoveToFront(alphabet_size)
    ranks = [mtf.encode_symbol(c) for c in symbols]
    log("mtf_encode:", len(ranks), "symbols,", ranks.count(0), "zero ranks")
    return ranks


def mtf_decode(ranks: T.Iterable[int], alphabet_size: int = R) -> bytes:
    """Inverse of mtf_encode(), starting from a fresh identity list."""
    positions = _as_sequence("ranks", ranks)
    mtf = MoveToFront(alphabet_size)
    out = bytes(mtf.decode_rank(r) for r in positions)
    log("mtf_decode:", len(out), "symbols")
    return out
