#!/usr/bin/env python3
"""Throughput micro-benchmarks for the one-shot, streaming and batch paths."""
from __future__ import annotations

import argparse
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from blake2bcore.batch import blake2b_many
from blake2bcore.blake2b import blake2b_bytes, init


def bench_oneshot(size: int, trials: int, seed: int) -> None:
    rng = random.Random(seed)
    data = bytes(rng.getrandbits(8) for _ in range(size))
    start = time.perf_counter()
    for _ in range(trials):
        blake2b_bytes(data)
    elapsed = time.perf_counter() - start
    rate = size * trials / elapsed / 1024 if elapsed else 0.0
    print(f"oneshot: size={size} trials={trials} time={elapsed:.3f}s rate={rate:.2f} KiB/s")


def bench_streaming(size: int, chunk: int, trials: int, seed: int) -> None:
    rng = random.Random(seed)
    data = bytes(rng.getrandbits(8) for _ in range(size))
    start = time.perf_counter()
    for _ in range(trials):
        ctx = init()
        for off in range(0, size, chunk):
            ctx.update(data[off : off + chunk])
        ctx.final()
    elapsed = time.perf_counter() - start
    rate = size * trials / elapsed / 1024 if elapsed else 0.0
    print(f"streaming: size={size} chunk={chunk} trials={trials} time={elapsed:.3f}s rate={rate:.2f} KiB/s")


def bench_batch(lanes: int, size: int, seed: int) -> None:
    rng = random.Random(seed)
    msgs = [bytes(rng.getrandbits(8) for _ in range(size)) for _ in range(lanes)]
    start = time.perf_counter()
    out = blake2b_many(msgs)
    elapsed = time.perf_counter() - start
    ok = out[0] == blake2b_bytes(msgs[0])
    rate = lanes / elapsed if elapsed else 0.0
    print(f"batch: lanes={lanes} size={size} ok={ok} time={elapsed:.3f}s rate={rate:.2f} msg/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=1 << 14)
    ap.add_argument("--chunk", type=int, default=100)
    ap.add_argument("--trials", type=int, default=5)
    ap.add_argument("--lanes", type=int, default=4096)
    ap.add_argument("--seed", type=int, default=2024)
    args = ap.parse_args()

    bench_oneshot(args.size, args.trials, args.seed)
    bench_streaming(args.size, args.chunk, args.trials, args.seed)
    bench_batch(args.lanes, 256, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
