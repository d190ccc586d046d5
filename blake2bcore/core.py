from __future__ import annotations

from typing import List, Sequence, Tuple

MASK64 = 0xFFFFFFFFFFFFFFFF

BLOCK_BYTES = 128
OUT_BYTES = 64
KEY_BYTES = 64
ROUNDS = 12


def u64(x: int) -> int:
    return x & MASK64


def rr64(x: int, s: int) -> int:
    x &= MASK64
    return ((x >> s) | (x << (64 - s))) & MASK64


# IV is the SHA-512 IV (fractional parts of the square roots of the first 8 primes)
BLAKE2B_IV: Tuple[int, ...] = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)

# Message word schedule; round r uses SIGMA[r % 10]
SIGMA: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# Rotation constants (R1..R4) of G
ROTATIONS: Tuple[int, int, int, int] = (32, 24, 16, 63)

# (a, b, c, d) work-vector indices: four columns, then four diagonals
G_INDEX: Tuple[Tuple[int, int, int, int], ...] = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


def sigma_for_round(r: int) -> Tuple[int, ...]:
    return SIGMA[r % 10]


def mix(v: List[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    """G: mixes v[a], v[b], v[c], v[d] in place with message words x and y."""
    r1, r2, r3, r4 = ROTATIONS
    v[a] = (v[a] + v[b] + x) & MASK64
    v[d] = rr64(v[d] ^ v[a], r1)
    v[c] = (v[c] + v[d]) & MASK64
    v[b] = rr64(v[b] ^ v[c], r2)
    v[a] = (v[a] + v[b] + y) & MASK64
    v[d] = rr64(v[d] ^ v[a], r3)
    v[c] = (v[c] + v[d]) & MASK64
    v[b] = rr64(v[b] ^ v[c], r4)


def param_block(digest_size: int, key_len: int = 0) -> Tuple[int, ...]:
    """
    Parameter block as 8 little-endian words.
    Only word 0 is non-zero for sequential hashing:
      byte 0: digest length, byte 1: key length, byte 2: fanout=1, byte 3: depth=1
    Leaf length, node offset, node depth, inner length, salt and personal are zero.
    """
    p0 = (digest_size & 0xFF) | ((key_len & 0xFF) << 8) | (1 << 16) | (1 << 24)
    return (p0, 0, 0, 0, 0, 0, 0, 0)


def initial_state(digest_size: int, key_len: int = 0) -> List[int]:
    p = param_block(digest_size, key_len)
    return [BLAKE2B_IV[i] ^ p[i] for i in range(8)]


def compress_block(
    h: Sequence[int],
    m: Sequence[int],
    t0: int,
    t1: int,
    last: bool,
    rounds: int = ROUNDS,
) -> List[int]:
    """
    Blake2b compression function F.
    Inputs:
      - h: 8 chaining words
      - m: 16 little-endian 64-bit message words
      - t0, t1: low and high words of the byte counter
      - last: finalization flag
      - rounds: 12 for Blake2b, any non-negative count for EIP-152
    Returns the next 8 chaining words.
    """
    if len(h) != 8:
        raise ValueError("h must have 8 words")
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    v = [u64(w) for w in h] + list(BLAKE2B_IV)
    v[12] ^= u64(t0)
    v[13] ^= u64(t1)
    if last:
        v[14] ^= MASK64

    for r in range(rounds):
        s = SIGMA[r % 10]
        for i, (a, b, c, d) in enumerate(G_INDEX):
            mix(v, a, b, c, d, m[s[2 * i]], m[s[2 * i + 1]])

    return [u64(h[i]) ^ v[i] ^ v[i + 8] for i in range(8)]


def add_counter(t0: int, t1: int, n: int) -> Tuple[int, int]:
    # 128-bit counter as two words; wraps silently
    t0 += n
    if t0 > MASK64:
        t0 &= MASK64
        t1 = (t1 + 1) & MASK64
    return t0, t1


def bytes_to_words_le(block: bytes) -> List[int]:
    assert len(block) == BLOCK_BYTES
    return [int.from_bytes(block[i : i + 8], "little") for i in range(0, BLOCK_BYTES, 8)]


def words_to_bytes_le(words: Sequence[int]) -> bytes:
    return b"".join(u64(w).to_bytes(8, "little") for w in words)
