#!/usr/bin/env python

"""
Bitfield reader and writer classes. These are used at the edge of the
package, to frame a transformed block: a 32-bit index followed by 8-bit
symbols, most significant bit first. Data is read from and written to
file-like objects.

Bit-based snooping and telling the current position are also supported.
"""

# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import typing as T
import logging

from pybwt.errors import InvalidInput

INT_BITS = 32


class LengthError(InvalidInput):
    """Exception raised when the end of the stream is reached."""


class Bitfield:
    """
    MSB-first bit reader.
    """

    def __init__(self, x: T.BinaryIO) -> None:
        """Initialize the Bitfield object from a file-like object."""
        self.f = x
        self.bits = 0
        self.bitfield = 0x0
        self.count = 0

    def _read(self, n: int) -> bytes:
        """Read n bytes from the file-like object."""
        s = self.f.read(n)
        if not s:
            raise LengthError(f"end of stream after {self.count} bytes")
        self.count += len(s)
        return s

    def _needbits(self, n: int) -> None:
        """Triggered when the number of bits needed is greater than the
        number of bits available. This function reads more data from the
        file-like object."""
        while self.bits < n:
            self._more()

    @staticmethod
    def _mask(n: int) -> int:
        """Return a mask of n bits."""
        return (1 << n) - 1

    def _more(self) -> None:
        """Read one more byte below the bits already buffered."""
        c = self._read(1)
        self.bitfield = (self.bitfield << 8) | c[0]
        self.bits += 8

    def toskip(self) -> int:
        """Return the number of bits to skip to align the bitfield."""
        return self.bits & 0b111

    def align(self) -> None:
        """Drop what is left of the current byte."""
        self.readbits(self.toskip())

    def tellbits(self) -> int:
        """Return the number of bits consumed so far."""
        return (self.count << 3) - self.bits

    def tell(self) -> T.Tuple[int, int]:
        """Return the current position as (bytes, bits).

        The first integer is the number of whole bytes consumed, the
        second the number of bits consumed from the byte after that.
        """
        return divmod(self.tellbits(), 8)

    def snoopbits(self, n: int = 8) -> int:
        """Read n bits without moving the current position."""
        if n > self.bits:
            self._needbits(n)
        return (self.bitfield >> (self.bits - n)) & self._mask(n)

    def readbits(self, n: int = 8) -> int:
        """Read n bits."""
        r = self.snoopbits(n)
        self.bits -= n
        self.bitfield &= self._mask(self.bits)
        return r

    def readbyte(self) -> int:
        return self.readbits(8)

    def readint(self) -> int:
        """Read a signed 32-bit big-endian integer."""
        v = self.readbits(INT_BITS)
        if v >> (INT_BITS - 1):
            v -= 1 << INT_BITS
        return v

    def readbytes(self) -> bytes:
        """Read everything up to the end of the stream.

        Must be called on a byte boundary.
        """
        if self.toskip():
            raise InvalidInput(f"readbytes() at bit offset {self.tell()}")
        head = self.bitfield.to_bytes(self.bits >> 3, "big")
        self.bitfield = 0
        self.bits = 0
        rest = self.f.read()
        self.count += len(rest)
        return head + rest

    def isempty(self) -> bool:
        if self.bits:
            return False
        try:
            self._more()
        except LengthError:
            return True
        return False


class BitWriter:
    """
    MSB-first bit writer. Whole bytes are buffered until flush().
    """

    def __init__(self, f: T.BinaryIO) -> None:
        self.f = f
        self.bits = 0
        self.bitfield = 0x0
        self.buf = bytearray()

    def writebits(self, v: int, n: int) -> None:
        """Write the n low bits of v."""
        if v < 0 or v >> n:
            raise InvalidInput(f"{v} does not fit in {n} bits")
        self.bitfield = (self.bitfield << n) | v
        self.bits += n
        while self.bits >= 8:
            self.bits -= 8
            self.buf.append((self.bitfield >> self.bits) & 0xFF)
        self.bitfield &= (1 << self.bits) - 1

    def writebyte(self, b: int) -> None:
        self.writebits(b, 8)

    def writeint(self, v: int) -> None:
        """Write a signed 32-bit big-endian integer."""
        if not -(1 << (INT_BITS - 1)) <= v < (1 << (INT_BITS - 1)):
            raise InvalidInput(f"{v} does not fit in a 32-bit int")
        self.writebits(v & ((1 << INT_BITS) - 1), INT_BITS)

    def writebytes(self, data: T.Iterable[int]) -> None:
        if self.bits:
            for b in data:
                self.writebyte(b)
        else:
            self.buf += bytes(data)

    def flush(self) -> None:
        """Pad the last byte with zero bits and write out the buffer."""
        if self.bits:
            self.writebits(0, 8 - self.bits)
        self.f.write(bytes(self.buf))
        self.buf.clear()
        if hasattr(self.f, "flush"):
            self.f.flush()


import unittest
import io


class TestBitfield(unittest.TestCase):
    """
    Test cases for the Bitfield and BitWriter classes.
    """

    def test_bitfield_read(self) -> None:
        """
        Bits come out most significant first, the position moves with
        them and reading past the end raises LengthError.
        """
        b = Bitfield(io.BytesIO(b"\x80"))
        self.assertEqual(b.readbits(1), 1)
        self.assertEqual(b.tell(), (0, 1))
        self.assertEqual(b.readbits(1), 0)
        self.assertEqual(b.tell(), (0, 2))
        with self.assertRaises(LengthError):
            b.readbits(8)

    def test_snoop(self) -> None:
        """
        Snooping does not consume bits.
        """
        b = Bitfield(io.BytesIO(bytes([0b01100000, 0b10000001])))
        self.assertEqual(b.snoopbits(2), 0b01)
        self.assertEqual(b.snoopbits(2), 0b01)
        self.assertEqual(b.readbits(2), 0b01)
        self.assertEqual(b.snoopbits(8), 0b10000010)
        self.assertEqual(b.readbits(8), 0b10000010)

    def test_align(self) -> None:
        b = Bitfield(io.BytesIO(bytes([2, 1, 3, 7])))
        self.assertEqual(b.tellbits(), 0)
        b.readbits(1)
        self.assertEqual(b.toskip(), 0b111)
        b.align()
        self.assertEqual(b.tellbits(), 8)
        self.assertEqual(b.readbyte(), 1)

    def test_int_and_rest(self) -> None:
        b = Bitfield(io.BytesIO(b"\x00\x00\x01\x02xyz"))
        self.assertEqual(b.readint(), 258)
        self.assertEqual(b.readbytes(), b"xyz")
        self.assertTrue(b.isempty())

    def test_negative_int(self) -> None:
        b = Bitfield(io.BytesIO(b"\xff\xff\xff\xff"))
        self.assertEqual(b.readint(), -1)

    def test_isempty_keeps_data(self) -> None:
        b = Bitfield(io.BytesIO(b"A"))
        self.assertFalse(b.isempty())
        self.assertEqual(b.readbytes(), b"A")

    def test_writer(self) -> None:
        """
        The writer is the mirror image of the reader, padding the last
        byte with zeros.
        """
        out = io.BytesIO()
        w = BitWriter(out)
        w.writeint(3)
        w.writebytes(b"AB")
        w.writebits(1, 1)
        w.flush()
        self.assertEqual(out.getvalue(), b"\x00\x00\x00\x03AB\x80")

    def test_writer_range(self) -> None:
        w = BitWriter(io.BytesIO())
        with self.assertRaises(InvalidInput):
            w.writebits(4, 2)
        with self.assertRaises(InvalidInput):
            w.writeint(1 << 31)


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.DEBUG)
    unittest.main()  # pragma: no cover
