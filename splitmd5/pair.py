"""Digests over discontiguous buffers.

:func:`digest_into` is the two-buffer entry point: it hashes
``input1[:input1_len] ++ input2[:input2_len]`` and writes the 16-byte digest
into a caller-supplied buffer. The remaining helpers return ``bytes`` and
generalise the same fold to N buffers or to a wrapped ring-buffer window.
"""

from __future__ import annotations

from typing import Optional

from .constants import DIGEST_SIZE
from .diag import DISABLED, DiagnosticConfig
from .errors import InvalidLengthError
from .md5 import BytesLike, Md5Context, _as_view


def _prefix(view: memoryview, n: int, name: str) -> memoryview:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidLengthError(f"{name} must be an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidLengthError(f"{name} must be non-negative (got {n})")
    if n > len(view):
        raise InvalidLengthError(f"{name}={n} exceeds buffer size {len(view)}")
    return view[:n]


def _writable_out(out) -> memoryview:
    try:
        view = memoryview(out)
    except TypeError as exc:
        raise InvalidLengthError("out must be a writable bytes-like object") from exc
    if view.readonly:
        raise InvalidLengthError("out must be writable")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    if len(view) < DIGEST_SIZE:
        raise InvalidLengthError(f"out must hold at least {DIGEST_SIZE} bytes (got {len(view)})")
    return view


def digest_into(
    out,
    input1: BytesLike,
    input1_len: int,
    input2: BytesLike,
    input2_len: int,
    *,
    diagnostics: Optional[DiagnosticConfig] = None,
) -> None:
    """Write MD5(``input1[:input1_len]`` + ``input2[:input2_len]``) into ``out``.

    Args:
        out: Writable buffer of at least 16 bytes; only the first 16 are written.
        input1: First region.
        input1_len: Number of leading bytes of ``input1`` to hash (0 allowed).
        input2: Second region.
        input2_len: Number of leading bytes of ``input2`` to hash (0 allowed).
        diagnostics: Optional dump configuration; disabled when omitted.

    Raises:
        InvalidLengthError: On negative or oversized lengths or an unusable
            ``out``. Nothing is hashed or written in that case.
    """
    dst = _writable_out(out)
    part1 = _prefix(_as_view(input1), input1_len, "input1_len")
    part2 = _prefix(_as_view(input2), input2_len, "input2_len")
    diag = diagnostics or DISABLED

    diag.emit("out", dst[:DIGEST_SIZE])
    diag.emit("input1", part1)
    diag.emit("input2", part2)

    ctx = Md5Context().begin()
    ctx.update(part1)
    ctx.update(part2)
    dst[:DIGEST_SIZE] = ctx.result()

    diag.emit("digest", dst[:DIGEST_SIZE])


def md5_2(b1: BytesLike, b2: BytesLike) -> bytes:
    out = bytearray(DIGEST_SIZE)
    digest_into(out, b1, len(_as_view(b1)), b2, len(_as_view(b2)))
    return bytes(out)


def md5_many(*parts: BytesLike) -> bytes:
    """Digest of the concatenation of any number of buffers."""
    ctx = Md5Context().begin()
    for part in parts:
        ctx.update(part)
    return ctx.result()


def md5_window(buf: BytesLike, start: int, length: Optional[int] = None) -> bytes:
    """Digest of a wrapped ring-buffer window.

    The window begins at ``start`` and wraps around: the hashed bytes are
    ``buf[start:length]`` followed by ``buf[:start]``. ``length`` is the number
    of valid bytes in ``buf`` and defaults to the whole buffer.
    """
    view = _as_view(buf)
    valid = _prefix(view, len(view) if length is None else length, "length")
    if isinstance(start, bool) or not isinstance(start, int) or not 0 <= start <= len(valid):
        raise InvalidLengthError(f"start must be in 0..{len(valid)} (got {start!r})")
    out = bytearray(DIGEST_SIZE)
    digest_into(out, valid[start:], len(valid) - start, valid, start)
    return bytes(out)
