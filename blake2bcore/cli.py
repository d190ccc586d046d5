from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .blake2b import blake2b_bytes, init
from .core import OUT_BYTES
from .eip152 import blake2f
from .errors import Blake2bError
from .paths import KAT_FILE_ENV, find_kat_file
from .verify import (
    REFERENCE_VECTORS,
    check_against_hashlib,
    check_kat_vectors,
    check_reference_vectors,
    load_kat_vectors,
)

READ_CHUNK = 1 << 16


def parse_hex(text: str) -> bytes:
    s = text.strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hex string: {text!r}") from None


def cmd_verify_core(_: argparse.Namespace) -> int:
    ok_ref, bad_ref = check_reference_vectors()
    for i, (inhex, size, outhex) in enumerate(REFERENCE_VECTORS):
        status = "FAIL" if i in bad_ref else "OK"
        print(f"BLAKE2b-{size * 8}(len={len(inhex) // 2}) -> {status}")
        if i in bad_ref:
            print(f"  ours={bad_ref[i]}\n  ref ={outhex}")

    ok_lib, bad_lib = check_against_hashlib()
    print(f"hashlib corpus (n=0..255): {'OK' if ok_lib else 'FAIL'} mismatches={len(bad_lib)}")
    ok_key, bad_key = check_against_hashlib(key=bytes(range(64)))
    print(f"hashlib keyed corpus (n=0..255): {'OK' if ok_key else 'FAIL'} mismatches={len(bad_key)}")

    ok_all = ok_ref and ok_lib and ok_key
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_verify_kat(ns: argparse.Namespace) -> int:
    path = find_kat_file(ns.file)
    if path is None:
        print(f"verify-kat: no blake2-kat.json found (pass --file or set {KAT_FILE_ENV})")
        return 1
    vectors = load_kat_vectors(path)
    ok, bad = check_kat_vectors(vectors, keyed=ns.keyed)
    print(f"verify-kat: file={path} vectors={len(vectors)} keyed={ns.keyed} mismatches={len(bad)}")
    for i, ours in sorted(bad.items())[:10]:
        print(f"  #{i}: ours={ours}\n       ref ={vectors[i].out.hex()}")
    print("verify-kat:", "PASS" if ok else "FAIL")
    return 0 if ok else 1


def cmd_hash(ns: argparse.Namespace) -> int:
    key = ns.key or b""
    if ns.hex_input:
        digest = blake2b_bytes(parse_hex(ns.input), ns.size, key)
        print(f"{digest.hex()}  {ns.input}")
        return 0

    ctx = init(ns.size, key)
    if ns.input == "-":
        stream = sys.stdin.buffer
        for chunk in iter(lambda: stream.read(READ_CHUNK), b""):
            ctx.update(chunk)
        name = "-"
    else:
        path = Path(ns.input)
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(READ_CHUNK), b""):
                ctx.update(chunk)
        name = str(path)
    print(f"{ctx.hexfinal()}  {name}")
    return 0


def cmd_blake2f(ns: argparse.Namespace) -> int:
    print(blake2f(ns.input).hex())
    return 0


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="blake2bcore")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", help="check the engine against reference vectors and hashlib")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("verify-kat", help="check the engine against blake2-kat.json")
    s2.add_argument("--file", default=None, help=f"path to blake2-kat.json (default: ${KAT_FILE_ENV})")
    s2.add_argument("--keyed", action="store_true", help="also check keyed vectors")
    s2.set_defaults(func=cmd_verify_kat)

    s3 = sub.add_parser("hash", help="digest a file, stdin ('-') or a hex string")
    s3.add_argument("input", nargs="?", default="-")
    s3.add_argument("-n", "--size", type=int, default=OUT_BYTES, help="digest size in bytes (1..64)")
    s3.add_argument("--key", type=parse_hex, default=None, help="hex key, at most 64 bytes")
    s3.add_argument("--hex-input", action="store_true", help="treat INPUT as hex-encoded bytes")
    s3.set_defaults(func=cmd_hash)

    s4 = sub.add_parser("blake2f", help="run the EIP-152 compression function on 213 hex-encoded bytes")
    s4.add_argument("input", type=parse_hex)
    s4.set_defaults(func=cmd_blake2f)

    args = p.parse_args(argv)
    try:
        return int(args.func(args))
    except (Blake2bError, OSError, argparse.ArgumentTypeError) as exc:
        print(f"{args.cmd}: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
