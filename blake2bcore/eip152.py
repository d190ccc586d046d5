"""
Blake2b compression function F in the EIP-152 precompile encoding.

Input is exactly 213 bytes:
  rounds (4 bytes, big-endian) | h (64 bytes) | m (128 bytes) | t0 (8) | t1 (8) | f (1)
All words of h, m, t0 and t1 are little-endian. f must be 0 or 1.
The output is the 64-byte little-endian state after `rounds` rounds of F.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .core import BLOCK_BYTES, MASK64, bytes_to_words_le, compress_block, words_to_bytes_le
from .errors import InvalidParameter

F_INPUT_LEN = 213
ROUNDS_LEN = 4
H_LEN = 64


@dataclass(frozen=True)
class FInput:
    rounds: int
    h: Tuple[int, ...]
    m: Tuple[int, ...]
    t0: int
    t1: int
    last: bool


def decode_f_input(data: bytes) -> FInput:
    if len(data) != F_INPUT_LEN:
        raise InvalidParameter(f"F input must be {F_INPUT_LEN} bytes, got {len(data)}")
    off = 0
    rounds = int.from_bytes(data[off : off + ROUNDS_LEN], "big")
    off += ROUNDS_LEN
    h = tuple(int.from_bytes(data[off + i : off + i + 8], "little") for i in range(0, H_LEN, 8))
    off += H_LEN
    m = tuple(bytes_to_words_le(data[off : off + BLOCK_BYTES]))
    off += BLOCK_BYTES
    t0 = int.from_bytes(data[off : off + 8], "little")
    t1 = int.from_bytes(data[off + 8 : off + 16], "little")
    off += 16
    f = data[off]
    if f not in (0, 1):
        raise InvalidParameter(f"final block flag must be 0 or 1, got {f}")
    return FInput(rounds=rounds, h=h, m=m, t0=t0, t1=t1, last=bool(f))


def encode_f_input(inp: FInput) -> bytes:
    if not (0 <= inp.rounds < 1 << 32):
        raise InvalidParameter("rounds must fit in 4 bytes")
    if len(inp.h) != 8 or len(inp.m) != 16:
        raise InvalidParameter("h must have 8 words and m 16 words")
    return (
        inp.rounds.to_bytes(ROUNDS_LEN, "big")
        + words_to_bytes_le(inp.h)
        + words_to_bytes_le(inp.m)
        + (inp.t0 & MASK64).to_bytes(8, "little")
        + (inp.t1 & MASK64).to_bytes(8, "little")
        + (b"\x01" if inp.last else b"\x00")
    )


def blake2f(data: bytes) -> bytes:
    inp = decode_f_input(data)
    h = compress_block(inp.h, inp.m, inp.t0, inp.t1, inp.last, rounds=inp.rounds)
    return words_to_bytes_le(h)
