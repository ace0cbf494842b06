from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from splitmd5.constants import BLOCK_SIZE, DIGEST_SIZE
from splitmd5.diag import DiagnosticConfig
from splitmd5.errors import DigestMismatch, Md5Error
from splitmd5.md5 import Md5Context, md5
from splitmd5.pair import digest_into, md5_many
from splitmd5.reference import reference_md5


# RFC 1321, appendix A.5
KNOWN_ANSWERS: Tuple[Tuple[bytes, str], ...] = (
    (b"", "d41d8cd98f00b204e9800998ecf8427e"),
    (b"a", "0cc175b9c0f1b6a831c399e269772661"),
    (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
    (b"message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    (b"abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
    (
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        "d174ab98d277d9f5a5611c2c9f419d9f",
    ),
    (b"1234567890" * 8, "57edf4a22be3c955ac49da2e2107b67a"),
)

# Lengths around the point where the length field stops fitting in the last block
BOUNDARY_LENGTHS = (55, 56, 57, 63, 64, 65, 119, 120, 128)


def _digest_parts(parts: Sequence[bytes], *, check: bool, diagnostics: DiagnosticConfig) -> bytes:
    if len(parts) == 2:
        out = bytearray(DIGEST_SIZE)
        digest_into(out, parts[0], len(parts[0]), parts[1], len(parts[1]), diagnostics=diagnostics)
        digest = bytes(out)
    else:
        digest = md5_many(*parts)
    if check:
        expected = reference_md5(*parts)
        if digest != expected:
            raise DigestMismatch(f"engine digest {digest.hex()} != reference {expected.hex()}")
    return digest


def cmd_sum(paths: List[str], *, check: bool = False, diagnostics: Optional[DiagnosticConfig] = None) -> bool:
    """Print the digest of the concatenated contents of ``paths``.

    Args:
        paths: One or more files, hashed in the given order.
        check: Confirm the digest against PyCryptodomex.
        diagnostics: Dump configuration for the two-file case.
    """
    parts = [Path(p).read_bytes() for p in paths]
    digest = _digest_parts(parts, check=check, diagnostics=diagnostics or DiagnosticConfig())
    print(f"{digest.hex()}  {'+'.join(paths)}")
    return True


def cmd_text(strings: List[str], *, check: bool = False, diagnostics: Optional[DiagnosticConfig] = None) -> bool:
    """Print the digest of the concatenated UTF-8 encodings of ``strings``."""
    parts = [s.encode("utf-8") for s in strings]
    digest = _digest_parts(parts, check=check, diagnostics=diagnostics or DiagnosticConfig())
    print(digest.hex())
    return True


def _selftest_vectors():
    for data, expected in KNOWN_ANSWERS:
        yield f"kat len={len(data)}", data, expected
    for n in BOUNDARY_LENGTHS:
        data = bytes((i * 7 + 3) & 0xFF for i in range(n))
        yield f"boundary len={n}", data, reference_md5(data).hex()


def cmd_selftest(*, quiet: bool = False) -> bool:
    """Run known-answer and padding-boundary vectors.

    Each vector is hashed in one call, split in two at every block-relative
    offset that matters, and fed one byte at a time.
    """
    failed = 0
    total = 0
    for label, data, expected in _selftest_vectors():
        total += 1
        results = {md5(data).hex()}
        for cut in sorted({0, 1, len(data) // 2, min(BLOCK_SIZE, len(data)), len(data)}):
            results.add(md5_many(data[:cut], data[cut:]).hex())
        ctx = Md5Context.new()
        for i in range(len(data)):
            ctx.update(data[i : i + 1])
        results.add(ctx.hexdigest())

        ok = results == {expected}
        if not ok:
            failed += 1
        if not quiet or not ok:
            print(f"{'OK  ' if ok else 'FAIL'} {label} {expected}")
    print(f"Summary: total={total} failed={failed}")
    return failed == 0


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="splitmd5",
        description="MD5 over discontiguous buffers",
        epilog="Set MDEBUG=1 (or pass --debug) to dump two-buffer inputs and digests to stderr.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_sum = sub.add_parser("sum", help="Digest the concatenation of one or more files")
    ap_sum.add_argument("paths", nargs="+", help="Files, hashed in order")
    ap_sum.add_argument("--check", action="store_true", help="Confirm against PyCryptodomex")
    ap_sum.add_argument("--debug", action="store_true", help="Dump two-buffer inputs and digest to stderr")

    ap_text = sub.add_parser("text", help="Digest the concatenation of one or more strings")
    ap_text.add_argument("strings", nargs="+", help="Strings (UTF-8), hashed in order")
    ap_text.add_argument("--check", action="store_true", help="Confirm against PyCryptodomex")
    ap_text.add_argument("--debug", action="store_true", help="Dump two-buffer inputs and digest to stderr")

    ap_self = sub.add_parser("selftest", help="Run known-answer and padding boundary vectors")
    ap_self.add_argument("--quiet", help="limit outputs to failures and the summary", action="store_true")

    args = ap.parse_args(argv)
    diagnostics = DiagnosticConfig.from_environment()
    if getattr(args, "debug", False):
        diagnostics = DiagnosticConfig(enabled=True)

    try:
        if args.cmd == "sum":
            cmd_sum(args.paths, check=args.check, diagnostics=diagnostics)
        elif args.cmd == "text":
            cmd_text(args.strings, check=args.check, diagnostics=diagnostics)
        elif args.cmd == "selftest":
            success = cmd_selftest(quiet=args.quiet)
            sys.exit(0 if success else 1)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except DigestMismatch as e:
        print(f"Error: digest mismatch: {e}", file=sys.stderr)
        sys.exit(1)
    except (Md5Error, OSError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
