import unittest

import numpy as np

from blake2bcore.batch import blake2b_many, compress_lanes
from blake2bcore.blake2b import blake2b_bytes
from blake2bcore.core import bytes_to_words_le, compress_block, initial_state
from blake2bcore.errors import InvalidParameter


class TestBatch(unittest.TestCase):
    def test_matches_scalar_engine(self) -> None:
        msgs = [bytes((i + n) & 0xFF for i in range(n)) for n in (0, 1, 3, 127, 128, 129, 255, 256, 300, 3, 0)]
        for size in (64, 32, 7):
            self.assertEqual(blake2b_many(msgs, size), [blake2b_bytes(m, size) for m in msgs])

    def test_preserves_order_across_groups(self) -> None:
        msgs = [b"a" * 200, b"b", b"c" * 129, b"d" * 2]
        out = blake2b_many(msgs)
        self.assertEqual(out[1], blake2b_bytes(b"b"))
        self.assertEqual(out[2], blake2b_bytes(b"c" * 129))

    def test_empty_batch(self) -> None:
        self.assertEqual(blake2b_many([]), [])

    def test_invalid_digest_size(self) -> None:
        with self.assertRaises(InvalidParameter):
            blake2b_many([b"x"], 0)

    def test_compress_lanes_matches_compress_block(self) -> None:
        blocks = [bytes((i * 3 + k) & 0xFF for i in range(128)) for k in range(4)]
        words = [bytes_to_words_le(b) for b in blocks]
        h0 = initial_state(64)
        h = [np.full(4, np.uint64(w), dtype=np.uint64) for w in h0]
        m = np.array(words, dtype=np.uint64).T
        t0 = np.array([1, 50, 128, 7], dtype=np.uint64)
        out = compress_lanes(h, m, t0, last=True)
        for lane in range(4):
            ref = compress_block(h0, words[lane], int(t0[lane]), 0, True)
            self.assertEqual([int(out[i][lane]) for i in range(8)], ref)


if __name__ == "__main__":
    unittest.main()
