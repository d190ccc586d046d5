from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from .blake2b import blake2b_bytes

# Known-answer vectors: (input hex, digest size, digest hex)
REFERENCE_VECTORS: List[Tuple[str, int, str]] = [
    (
        "",
        64,
        "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
        "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce",
    ),
    ("", 32, "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8"),
    (
        "616263",
        64,
        "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
        "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923",
    ),
    (
        "0001020304050607",
        64,
        "e998e0dc03ec30eb99bb6bfaaf6618acc620320d7220b3af2b23d112d8e9cb12"
        "62f3c0d60d183b1ee7f096d12dae42c958418600214d04f5ed6f5e718be35566",
    ),
    (
        bytes(range(25)).hex(),
        64,
        "54e6dab9977380a5665822db93374eda528d9beb626f9b94027071cb26675e11"
        "2b4a7fec941ee60a81e4d2ea3ff7bc52cfc45dfbfe735a1c646b2cf6d6a49b62",
    ),
    (bytes(range(25)).hex(), 32, "3b0b9b4027203daeb62f4ff868ac6cdd78a5cbbf7664725421a613794702f4f4"),
    (
        bytes(range(255)).hex(),
        64,
        "5b21c5fd8868367612474fa2e70e9cfa2201ffeee8fafab5797ad58fefa17c9b"
        "5b107da4a3db6320baaf2c8617d5a51df914ae88da3867c2d41f0cc14fa67928",
    ),
    (bytes(range(255)).hex(), 32, "1d0850ee9bca0abc9601e9deabe1418fedec2fb6ac4150bd5302d2430f9be943"),
]


@dataclass(frozen=True)
class KatVector:
    hash: str
    data: bytes
    key: bytes
    out: bytes


def load_kat_vectors(path: Path) -> List[KatVector]:
    """Read the reference `blake2-kat.json` (a list of {hash, in, key, out} hex objects)."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return [
        KatVector(
            hash=entry["hash"],
            data=bytes.fromhex(entry["in"]),
            key=bytes.fromhex(entry["key"]),
            out=bytes.fromhex(entry["out"]),
        )
        for entry in raw
    ]


def check_reference_vectors() -> Tuple[bool, Dict[int, str]]:
    bad: Dict[int, str] = {}
    for i, (inhex, size, outhex) in enumerate(REFERENCE_VECTORS):
        ours = blake2b_bytes(bytes.fromhex(inhex), size).hex()
        if ours != outhex:
            bad[i] = ours
    return (len(bad) == 0), bad


def check_kat_vectors(vectors: Iterable[KatVector], keyed: bool = False) -> Tuple[bool, Dict[int, str]]:
    # Only blake2b entries count; keyed ones are skipped unless asked for
    bad: Dict[int, str] = {}
    for i, vec in enumerate(vectors):
        if vec.hash != "blake2b":
            continue
        if vec.key and not keyed:
            continue
        ours = blake2b_bytes(vec.data, len(vec.out), vec.key)
        if ours != vec.out:
            bad[i] = ours.hex()
    return (len(bad) == 0), bad


def check_against_hashlib(
    lengths: Iterable[int] = range(256),
    digest_size: int = 64,
    key: bytes = b"",
) -> Tuple[bool, Dict[int, str]]:
    """Compare with hashlib.blake2b on the KAT corpus inputs bytes(range(n)) (n mod 256)."""
    bad: Dict[int, str] = {}
    for n in lengths:
        data = bytes(i & 0xFF for i in range(n))
        ours = blake2b_bytes(data, digest_size, key)
        ref = hashlib.blake2b(data, digest_size=digest_size, key=key).digest()
        if ours != ref:
            bad[n] = ours.hex()
    return (len(bad) == 0), bad
