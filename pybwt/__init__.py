#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).
#
# Stand-alone pure-Python block-sorting front end: Burrows-Wheeler transform
# followed by move-to-front coding.  The output is the rank stream an
# entropy coder would consume; no entropy coder is included.
#
# Framed streams carry the row of the original rotation as a 32-bit
# big-endian int, followed by one byte per symbol.

import typing as T

from pybwt.bit import Bitfield, BitWriter, LengthError
from pybwt.bwt import bwt_decode, bwt_encode, bwt_pointers
from pybwt.errors import BlockLike, InvalidInput, PreconditionViolation, as_block
from pybwt.log import log
from pybwt.mtf import MoveToFront, mtf_decode, mtf_encode
from pybwt.suffix import CircularSuffixArray, circular_sort, compare_rotations

__all__ = [
    "Bitfield",
    "BitWriter",
    "CircularSuffixArray",
    "InvalidInput",
    "LengthError",
    "MoveToFront",
    "PreconditionViolation",
    "as_block",
    "bwt_decode",
    "bwt_encode",
    "bwt_pointers",
    "circular_sort",
    "compare_rotations",
    "compress",
    "compress_stream",
    "decompress",
    "decompress_stream",
    "inverse_transform_stream",
    "mtf_decode",
    "mtf_decode_stream",
    "mtf_encode",
    "mtf_encode_stream",
    "transform_stream",
]


def compress(block: BlockLike) -> T.Tuple[int, T.List[int]]:
    """BWT then MTF.  Returns (first, ranks)."""
    first, last = bwt_encode(block)
    return first, mtf_encode(last)


def decompress(first: int, ranks: T.Iterable[int]) -> bytes:
    """Inverse of compress()."""
    return bwt_decode(first, mtf_decode(ranks))


def _read_block(inp: T.BinaryIO) -> bytes:
    b = Bitfield(inp)
    block = b.readbytes()
    log("read", len(block), "bytes")
    return block


def _read_framed(inp: T.BinaryIO) -> T.Tuple[int, bytes]:
    """Read the 32-bit first index and the symbols behind it."""
    b = Bitfield(inp)
    try:
        first = b.readint()
    except LengthError as e:
        raise InvalidInput(f"truncated header, {b.count} of 4 bytes") from e
    payload = b.readbytes()
    log("framed block: first", first, "symbols", len(payload))
    return first, payload


def _write_framed(out: T.BinaryIO, first: int, payload: T.Iterable[int]) -> None:
    w = BitWriter(out)
    w.writeint(first)
    w.writebytes(payload)
    w.flush()


def transform_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    """Read a whole block, write first and the last column."""
    first, last = bwt_encode(_read_block(inp))
    _write_framed(out, first, last)


def inverse_transform_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    first, last = _read_framed(inp)
    out.write(bwt_decode(first, last))


def mtf_encode_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    """One rank byte out for every byte in."""
    out.write(bytes(mtf_encode(Bitfield(inp).readbytes())))


def mtf_decode_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    out.write(mtf_decode(Bitfield(inp).readbytes()))


def compress_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    first, ranks = compress(_read_block(inp))
    _write_framed(out, first, ranks)


def decompress_stream(inp: T.BinaryIO, out: T.BinaryIO) -> None:
    first, ranks = _read_framed(inp)
    out.write(decompress(first, ranks))
