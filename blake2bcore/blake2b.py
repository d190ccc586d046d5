from __future__ import annotations

import operator
from enum import Enum
from typing import List, Union

from .core import (
    BLOCK_BYTES,
    KEY_BYTES,
    OUT_BYTES,
    add_counter,
    bytes_to_words_le,
    compress_block,
    initial_state,
    words_to_bytes_le,
)
from .errors import InvalidParameter, InvalidUsage

BytesLike = Union[bytes, bytearray, memoryview]


class ContextStatus(Enum):
    FRESH = "fresh"
    ACTIVE = "active"
    FINALIZED = "finalized"


def _byte_view(obj: BytesLike) -> memoryview:
    # memoryview rejects str and int, unlike bytes()
    return memoryview(obj).cast("B")


def check_digest_size(digest_size: int) -> int:
    if isinstance(digest_size, bool):
        raise InvalidParameter("digest_size must be an int, got bool")
    try:
        digest_size = operator.index(digest_size)
    except TypeError:
        raise InvalidParameter(f"digest_size must be an int, got {type(digest_size).__name__}") from None
    if not (1 <= digest_size <= OUT_BYTES):
        raise InvalidParameter(f"digest_size must be in range 1..{OUT_BYTES}, got {digest_size}")
    return digest_size


def check_key(key: BytesLike | None) -> bytes:
    k = b"" if key is None else _byte_view(key).tobytes()
    if len(k) > KEY_BYTES:
        raise InvalidParameter(f"key must be at most {KEY_BYTES} bytes, got {len(k)}")
    return k


class Blake2bContext:
    """
    Streaming Blake2b computation.

    At most one block is buffered. A full buffer is only compressed once more
    input arrives, so the last block (and its finalization flag) is resolved
    in :meth:`final`. A key occupies the whole first block.
    """

    def __init__(self, digest_size: int = OUT_BYTES, key: BytesLike | None = None) -> None:
        self._digest_size = check_digest_size(digest_size)
        k = check_key(key)
        self._h: List[int] = initial_state(self._digest_size, len(k))
        self._t0 = 0
        self._t1 = 0
        self._buf = bytearray(BLOCK_BYTES)
        self._buflen = 0
        self._status = ContextStatus.FRESH
        if k:
            self._buf[: len(k)] = k
            self._buflen = BLOCK_BYTES

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def status(self) -> ContextStatus:
        return self._status

    @property
    def counter(self) -> int:
        """Bytes compressed so far, as the 128-bit logical counter."""
        return (self._t1 << 64) | self._t0

    def _ensure_open(self, op: str) -> None:
        if self._status is ContextStatus.FINALIZED:
            raise InvalidUsage(f"{op}() called on a finalized context")

    def _compress(self, block: BytesLike, nbytes: int, last: bool) -> None:
        self._t0, self._t1 = add_counter(self._t0, self._t1, nbytes)
        self._h = compress_block(self._h, bytes_to_words_le(block), self._t0, self._t1, last)

    def update(self, data: BytesLike) -> None:
        self._ensure_open("update")
        mv = _byte_view(data)
        n = len(mv)
        if n == 0:
            return
        self._status = ContextStatus.ACTIVE

        off = 0
        while off < n:
            if self._buflen == BLOCK_BYTES:
                self._compress(bytes(self._buf), BLOCK_BYTES, last=False)
                self._buflen = 0
            if self._buflen == 0:
                # whole blocks straight from the input, keeping at least one byte back
                while n - off > BLOCK_BYTES:
                    self._compress(mv[off : off + BLOCK_BYTES], BLOCK_BYTES, last=False)
                    off += BLOCK_BYTES
            take = min(BLOCK_BYTES - self._buflen, n - off)
            self._buf[self._buflen : self._buflen + take] = mv[off : off + take]
            self._buflen += take
            off += take

    def final(self) -> bytes:
        self._ensure_open("final")
        nbytes = self._buflen
        self._buf[nbytes:] = bytes(BLOCK_BYTES - nbytes)
        self._compress(bytes(self._buf), nbytes, last=True)
        self._status = ContextStatus.FINALIZED
        self._buf = bytearray(BLOCK_BYTES)
        self._buflen = 0
        return words_to_bytes_le(self._h)[: self._digest_size]

    def hexfinal(self) -> str:
        return self.final().hex()

    def copy(self) -> "Blake2bContext":
        self._ensure_open("copy")
        other = Blake2bContext.__new__(Blake2bContext)
        other._digest_size = self._digest_size
        other._h = list(self._h)
        other._t0 = self._t0
        other._t1 = self._t1
        other._buf = bytearray(self._buf)
        other._buflen = self._buflen
        other._status = self._status
        return other


def init(digest_size: int = OUT_BYTES, key: BytesLike | None = None) -> Blake2bContext:
    return Blake2bContext(digest_size, key)


def update(ctx: Blake2bContext, data: BytesLike) -> Blake2bContext:
    ctx.update(data)
    return ctx


def final(ctx: Blake2bContext) -> bytes:
    return ctx.final()


def blake2b_bytes(data: BytesLike, digest_size: int = OUT_BYTES, key: BytesLike | None = None) -> bytes:
    return final(update(init(digest_size, key), data))


def blake2b_hex(data: BytesLike, digest_size: int = OUT_BYTES, key: BytesLike | None = None) -> str:
    return blake2b_bytes(data, digest_size, key).hex()
