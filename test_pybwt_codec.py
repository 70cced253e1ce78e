#!/usr/bin/env python

import random
import unittest

from pybwt import compress, decompress
from pybwt.bwt import bwt_decode, bwt_encode, bwt_pointers
from pybwt.errors import InvalidInput, PreconditionViolation
from pybwt.mtf import MoveToFront, mtf_decode, mtf_encode


class BurrowsWheelerTestCase(unittest.TestCase):
    def test_abracadabra(self) -> None:
        """Known transform of the classic example, and back."""
        first, last = bwt_encode(b"ABRACADABRA!")
        self.assertEqual(first, 3)
        self.assertEqual(last, b"ARD!RCAAAABB")
        self.assertEqual(bwt_decode(first, last), b"ABRACADABRA!")

    def test_repeated_character(self) -> None:
        first, last = bwt_encode(b"AAAA")
        self.assertTrue(0 <= first < 4)
        self.assertEqual(last, b"AAAA")
        self.assertEqual(bwt_decode(first, last), b"AAAA")

    def test_single_byte(self) -> None:
        self.assertEqual(bwt_encode(b"z"), (0, b"z"))
        self.assertEqual(bwt_decode(0, b"z"), b"z")

    def test_periodic_blocks(self) -> None:
        for s in (b"abab", b"abcabcabc", b"\x00\x01" * 40, b"xy" * 9 + b"x"):
            with self.subTest(s=s):
                self.assertEqual(bwt_decode(*bwt_encode(s)), s)

    def test_round_trip(self) -> None:
        rng = random.Random(7)
        for n in (1, 2, 5, 16, 17, 100, 1000):
            for alphabet in (b"a", b"ab", b"banana", bytes(range(256))):
                s = bytes(rng.choice(alphabet) for _ in range(n))
                with self.subTest(n=n, alphabet=alphabet[:8]):
                    first, last = bwt_encode(s)
                    self.assertEqual(len(last), n)
                    self.assertEqual(sorted(last), sorted(s))
                    self.assertEqual(bwt_decode(first, last), s)

    def test_large_block_with_zero_run(self) -> None:
        """A block of about 200k bytes with a long zero run round-trips."""
        rng = random.Random(11)
        words = [b"It ", b"was ", b"the ", b"best ", b"of ", b"times, ", b"worst "]
        text = b"".join(rng.choice(words) for _ in range(30000))
        s = text + b"\0" * 60000 + text[:1000]
        first, last = bwt_encode(s)
        self.assertEqual(len(last), len(s))
        self.assertEqual(bwt_decode(first, last), s)

    def test_text_block(self) -> None:
        text = (
            "It was the best of times, it was the worst of times, "
            "it was the age of wisdom, it was the age of foolishness"
        )
        first, last = bwt_encode(text)
        self.assertEqual(bwt_decode(first, last), text.encode("latin-1"))

    def test_pointers(self) -> None:
        """The first column is the sorted last column."""
        pointers, F = bwt_pointers(b"ARD!RCAAAABB")
        self.assertEqual(F, b"!AAAAABBCDRR")
        self.assertEqual(sorted(pointers), list(range(12)))

    def test_decode_declared_length(self) -> None:
        first, last = bwt_encode(b"banana")
        self.assertEqual(bwt_decode(first, last, length=6), b"banana")
        with self.assertRaises(PreconditionViolation):
            bwt_decode(first, last, length=7)

    def test_decode_invalid(self) -> None:
        for first, last in ((-1, b"abc"), (3, b"abc"), (0, b""), (0, None), ("0", b"abc"), (True, b"ab")):
            with self.subTest(first=first, last=last):
                with self.assertRaises(InvalidInput):
                    bwt_decode(first, last)

    def test_encode_invalid(self) -> None:
        for bad in (None, b"", 3.5):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidInput):
                    bwt_encode(bad)


class MoveToFrontTestCase(unittest.TestCase):
    def test_known_vector(self) -> None:
        self.assertEqual(mtf_encode(bytes([65, 65, 65, 66])), [65, 0, 0, 66])
        self.assertEqual(mtf_decode([65, 0, 0, 66]), bytes([65, 65, 65, 66]))

    def test_abracadabra_last_column(self) -> None:
        ranks = mtf_encode(b"CAAABCCCACCF")
        self.assertEqual(ranks, [67, 66, 0, 0, 67, 2, 0, 0, 2, 1, 0, 70])
        self.assertEqual(mtf_decode(ranks), b"CAAABCCCACCF")

    def test_round_trip(self) -> None:
        rng = random.Random(3)
        for n in (0, 1, 10, 500):
            s = bytes(rng.randrange(256) for _ in range(n))
            with self.subTest(n=n):
                ranks = mtf_encode(s)
                self.assertEqual(len(ranks), n)
                self.assertTrue(all(0 <= r < 256 for r in ranks))
                self.assertEqual(mtf_decode(ranks), s)

    def test_runs_become_zeros(self) -> None:
        self.assertEqual(mtf_encode(b"\x05" * 6), [5, 0, 0, 0, 0, 0])

    def test_calls_are_independent(self) -> None:
        """Every call starts from the identity list."""
        self.assertEqual(mtf_encode(b"B"), [66])
        self.assertEqual(mtf_encode(b"B"), [66])
        self.assertEqual(mtf_decode([66]), b"B")
        self.assertEqual(mtf_decode([66]), b"B")

    def test_state_stays_a_permutation(self) -> None:
        mtf = MoveToFront()
        for c in b"move to front":
            mtf.encode_symbol(c)
            self.assertEqual(sorted(mtf.symbols), list(range(256)))
            for p, v in enumerate(mtf.symbols):
                self.assertEqual(mtf.rank[v], p)
        self.assertEqual(mtf.symbols[0], ord("t"))

    def test_small_alphabet(self) -> None:
        ranks = mtf_encode([2, 2, 0, 1], alphabet_size=3)
        self.assertEqual(ranks, [2, 0, 1, 2])
        self.assertEqual(mtf_decode(ranks, alphabet_size=3), bytes([2, 2, 0, 1]))
        with self.assertRaises(InvalidInput):
            mtf_encode([3], alphabet_size=3)

    def test_invalid(self) -> None:
        with self.assertRaises(InvalidInput):
            mtf_decode([256])
        with self.assertRaises(InvalidInput):
            mtf_decode([-1])
        with self.assertRaises(InvalidInput):
            mtf_encode([300])
        with self.assertRaises(InvalidInput):
            mtf_encode(None)
        with self.assertRaises(InvalidInput):
            mtf_decode(None)
        with self.assertRaises(InvalidInput):
            MoveToFront(0)
        with self.assertRaises(InvalidInput):
            MoveToFront(257)
        with self.assertRaises(InvalidInput):
            MoveToFront(2.5)

    def test_invalid_types(self) -> None:
        """Malformed symbols and ranks are InvalidInput, not TypeError."""
        for bad in ([1.0], [True], ["a"], [None], 42, 3.5):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidInput):
                    mtf_decode(bad)
                with self.assertRaises(InvalidInput):
                    mtf_encode(bad)
        with self.assertRaises(InvalidInput):
            mtf_encode("€")
        mtf = MoveToFront()
        with self.assertRaises(InvalidInput):
            mtf.encode_symbol(False)
        with self.assertRaises(InvalidInput):
            mtf.decode_rank(2.0)

    def test_accepts_iterables(self) -> None:
        self.assertEqual(mtf_encode(iter([65, 65])), [65, 0])
        self.assertEqual(mtf_encode(bytearray(b"AA")), [65, 0])
        self.assertEqual(mtf_encode("AA"), [65, 0])
        self.assertEqual(mtf_decode(bytes([65, 0])), b"AA")
        self.assertEqual(mtf_decode(x for x in (65, 0)), b"AA")

    def test_failed_symbol_leaves_state(self) -> None:
        mtf = MoveToFront()
        mtf.encode_symbol(9)
        before = list(mtf.symbols)
        with self.assertRaises(InvalidInput):
            mtf.decode_rank(256)
        self.assertEqual(mtf.symbols, before)


class PipelineTestCase(unittest.TestCase):
    def test_round_trip(self) -> None:
        block = b"she sells seashells by the sea shore"
        first, ranks = compress(block)
        self.assertEqual(len(ranks), len(block))
        self.assertEqual(decompress(first, ranks), block)

    def test_abracadabra(self) -> None:
        first, ranks = compress("ABRACADABRA!")
        self.assertEqual(first, 3)
        self.assertEqual(ranks, mtf_encode(b"ARD!RCAAAABB"))
        self.assertEqual(decompress(first, ranks), b"ABRACADABRA!")

    def test_empty(self) -> None:
        with self.assertRaises(InvalidInput):
            compress(b"")
        with self.assertRaises(InvalidInput):
            decompress(0, [])


if __name__ == "__main__":
    unittest.main()
