from __future__ import annotations

import os
from pathlib import Path

KAT_FILE_ENV = "BLAKE2B_KAT_FILE"
KAT_FILE_NAME = "blake2-kat.json"


def project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def find_kat_file(explicit: str | None = None) -> Path | None:
    """
    Locate the reference `blake2-kat.json` corpus.

    Search order:
    1) `explicit` (if provided)
    2) env var `BLAKE2B_KAT_FILE`
    3) repo-local `testvectors/blake2-kat.json` and `tests/data/blake2-kat.json`
    """
    if explicit:
        p = Path(explicit).expanduser()
        if p.exists():
            return p
        return None

    env = os.getenv(KAT_FILE_ENV)
    if env:
        p = Path(env).expanduser()
        if p.exists():
            return p

    root = project_root()
    for rel in (Path("testvectors") / KAT_FILE_NAME, Path("tests/data") / KAT_FILE_NAME):
        p = root / rel
        if p.exists():
            return p
    return None
