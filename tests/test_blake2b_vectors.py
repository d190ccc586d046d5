import hashlib
import unittest

import numpy as np

from blake2bcore.blake2b import blake2b_bytes, blake2b_hex
from blake2bcore.errors import Blake2bError, InvalidParameter
from blake2bcore.verify import REFERENCE_VECTORS, check_against_hashlib, check_reference_vectors


class TestReferenceVectors(unittest.TestCase):
    def test_empty_512(self) -> None:
        self.assertEqual(
            blake2b_hex(b"", 64),
            "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
            "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce",
        )

    def test_empty_256(self) -> None:
        self.assertEqual(
            blake2b_hex(b"", 32),
            "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8",
        )

    def test_abc(self) -> None:
        self.assertEqual(
            blake2b_hex(bytes.fromhex("616263"), 64),
            "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
            "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923",
        )

    def test_eight_bytes(self) -> None:
        self.assertEqual(
            blake2b_hex(bytes(range(8)), 64),
            "e998e0dc03ec30eb99bb6bfaaf6618acc620320d7220b3af2b23d112d8e9cb12"
            "62f3c0d60d183b1ee7f096d12dae42c958418600214d04f5ed6f5e718be35566",
        )

    def test_255_bytes_256(self) -> None:
        self.assertEqual(
            blake2b_hex(bytes(range(255)), 32),
            "1d0850ee9bca0abc9601e9deabe1418fedec2fb6ac4150bd5302d2430f9be943",
        )

    def test_reference_table(self) -> None:
        ok, bad = check_reference_vectors()
        self.assertTrue(ok, bad)
        self.assertEqual(len(REFERENCE_VECTORS), 8)


class TestAgainstHashlib(unittest.TestCase):
    def test_unkeyed_kat_corpus(self) -> None:
        # the reference KAT inputs are bytes(range(n)) for n in 0..255
        ok, bad = check_against_hashlib(range(256), 64)
        self.assertTrue(ok, sorted(bad))

    def test_keyed_kat_corpus(self) -> None:
        ok, bad = check_against_hashlib(range(0, 256, 7), 64, key=bytes(range(64)))
        self.assertTrue(ok, sorted(bad))

    def test_every_digest_size(self) -> None:
        data = b"The quick brown fox jumps over the lazy dog"
        for n in range(1, 65):
            self.assertEqual(blake2b_bytes(data, n), hashlib.blake2b(data, digest_size=n).digest())

    def test_block_boundaries(self) -> None:
        for n in (127, 128, 129, 255, 256, 257, 1024, 1025):
            data = bytes((i * 31 + 7) & 0xFF for i in range(n))
            self.assertEqual(blake2b_bytes(data), hashlib.blake2b(data).digest(), n)

    def test_short_keys(self) -> None:
        data = bytes(range(200))
        for klen in (1, 16, 32, 63, 64):
            key = bytes(range(100, 100 + klen))
            self.assertEqual(
                blake2b_bytes(data, 32, key),
                hashlib.blake2b(data, digest_size=32, key=key).digest(),
            )

    def test_key_only_message(self) -> None:
        key = b"k" * 20
        self.assertEqual(blake2b_bytes(b"", 64, key), hashlib.blake2b(b"", key=key).digest())


class TestProperties(unittest.TestCase):
    def test_length(self) -> None:
        for n in (1, 2, 17, 32, 48, 63, 64):
            self.assertEqual(len(blake2b_bytes(b"x" * 300, n)), n)

    def test_deterministic(self) -> None:
        data = bytes(range(256)) * 3
        self.assertEqual(blake2b_bytes(data, 40), blake2b_bytes(data, 40))

    def test_sizes_are_not_truncations(self) -> None:
        d64 = blake2b_bytes(b"abc", 64)
        d32 = blake2b_bytes(b"abc", 32)
        self.assertNotEqual(d64[:32], d32)

    def test_accepts_bytes_like(self) -> None:
        ref = blake2b_bytes(b"hello")
        self.assertEqual(blake2b_bytes(bytearray(b"hello")), ref)
        self.assertEqual(blake2b_bytes(memoryview(b"hello")), ref)


class TestParameters(unittest.TestCase):
    def test_digest_size_range(self) -> None:
        for bad in (0, 65, -1, 1000):
            with self.assertRaises(InvalidParameter):
                blake2b_bytes(b"", bad)

    def test_digest_size_type(self) -> None:
        with self.assertRaises(InvalidParameter):
            blake2b_bytes(b"", 32.0)  # type: ignore[arg-type]
        with self.assertRaises(InvalidParameter):
            blake2b_bytes(b"", True)  # type: ignore[arg-type]

    def test_numpy_integer_digest_size(self) -> None:
        self.assertEqual(blake2b_bytes(b"abc", np.int64(32)), blake2b_bytes(b"abc", 32))
        self.assertEqual(len(blake2b_bytes(b"abc", np.uint8(20))), 20)
        with self.assertRaises(InvalidParameter):
            blake2b_bytes(b"abc", np.int32(65))

    def test_key_too_long(self) -> None:
        with self.assertRaises(InvalidParameter):
            blake2b_bytes(b"", 64, bytes(65))

    def test_invalid_parameter_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            blake2b_bytes(b"", 0)
        with self.assertRaises(Blake2bError):
            blake2b_bytes(b"", 0)

    def test_str_input_rejected(self) -> None:
        with self.assertRaises(TypeError):
            blake2b_bytes("abc")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
