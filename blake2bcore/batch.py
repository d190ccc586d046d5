"""
Batch Blake2b over numpy uint64 lanes.

Messages with the same block count are hashed in lockstep: every lane of a
group runs the same compression schedule, only the final-block counter
differs per lane. Numpy uint64 arithmetic wraps modulo 2^64, which is exactly
the addition G needs.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import numpy as np

from .blake2b import BytesLike, check_digest_size
from .core import BLAKE2B_IV, BLOCK_BYTES, G_INDEX, MASK64, OUT_BYTES, ROTATIONS, ROUNDS, SIGMA, initial_state

U64 = np.uint64
_ALL_ONES = U64(MASK64)
_ROT = tuple((U64(n), U64(64 - n)) for n in ROTATIONS)


def _rr_u64_np(x, rot):
    right, left = rot
    return (x >> right) | (x << left)


def _mix_np(v: List[np.ndarray], a: int, b: int, c: int, d: int, x: np.ndarray, y: np.ndarray) -> None:
    r1, r2, r3, r4 = _ROT
    v[a] = v[a] + v[b] + x
    v[d] = _rr_u64_np(v[d] ^ v[a], r1)
    v[c] = v[c] + v[d]
    v[b] = _rr_u64_np(v[b] ^ v[c], r2)
    v[a] = v[a] + v[b] + y
    v[d] = _rr_u64_np(v[d] ^ v[a], r3)
    v[c] = v[c] + v[d]
    v[b] = _rr_u64_np(v[b] ^ v[c], r4)


def compress_lanes(
    h: Sequence[np.ndarray],
    m: np.ndarray,
    t0: np.ndarray,
    last: bool,
) -> List[np.ndarray]:
    """
    Vectorized compression function F.
      - h: 8 arrays of shape (lanes,)
      - m: (16, lanes) message words
      - t0: (lanes,) low counter word; the high word is zero for any in-memory message
    """
    lanes = t0.shape[0]
    with np.errstate(over="ignore"):
        v = [x.copy() for x in h] + [np.full(lanes, U64(iv), dtype=U64) for iv in BLAKE2B_IV]
        v[12] = v[12] ^ t0
        if last:
            v[14] = v[14] ^ _ALL_ONES
        for r in range(ROUNDS):
            s = SIGMA[r % 10]
            for i, (a, b, c, d) in enumerate(G_INDEX):
                _mix_np(v, a, b, c, d, m[s[2 * i]], m[s[2 * i + 1]])
        return [h[i] ^ v[i] ^ v[i + 8] for i in range(8)]


def _hash_group(msgs: List[bytes], nblocks: int, digest_size: int) -> List[bytes]:
    lanes = len(msgs)
    width = nblocks * BLOCK_BYTES
    padded = b"".join(msg.ljust(width, b"\x00") for msg in msgs)
    words = np.frombuffer(padded, dtype="<u8").astype(U64).reshape(lanes, nblocks, 16)

    h = [np.full(lanes, U64(w), dtype=U64) for w in initial_state(digest_size)]
    for j in range(nblocks - 1):
        t0 = np.full(lanes, U64((j + 1) * BLOCK_BYTES), dtype=U64)
        h = compress_lanes(h, words[:, j, :].T, t0, last=False)
    lengths = np.array([len(msg) for msg in msgs], dtype=U64)
    h = compress_lanes(h, words[:, nblocks - 1, :].T, lengths, last=True)

    out = np.stack(h, axis=1).astype("<u8")
    return [out[i].tobytes()[:digest_size] for i in range(lanes)]


def blake2b_many(messages: Iterable[BytesLike], digest_size: int = OUT_BYTES) -> List[bytes]:
    """Unkeyed digests of many messages; equal to calling blake2b_bytes on each."""
    digest_size = check_digest_size(digest_size)
    msgs = [memoryview(msg).tobytes() for msg in messages]

    groups: Dict[int, List[int]] = {}
    for idx, msg in enumerate(msgs):
        nblocks = max(1, -(-len(msg) // BLOCK_BYTES))
        groups.setdefault(nblocks, []).append(idx)

    results: List[bytes] = [b""] * len(msgs)
    for nblocks, idxs in groups.items():
        digests = _hash_group([msgs[i] for i in idxs], nblocks, digest_size)
        for i, dg in zip(idxs, digests):
            results[i] = dg
    return results
