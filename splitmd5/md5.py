"""Incremental MD5 digest engine (RFC 1321).

The engine is a small state machine around the MD5 compression function.
Input is absorbed in any chunking through :meth:`Md5Context.update`; the
final digest only depends on the concatenation of everything absorbed, never
on where the call boundaries fell.

Module-level :func:`begin`, :func:`update` and :func:`result` mirror the
context methods for callers that prefer the procedural form.
"""

from __future__ import annotations

import enum
import struct
from typing import Union

from .constants import (
    BLOCK_SIZE,
    CONSTANTS,
    DIGEST_SIZE,
    INIT_STATE,
    LENGTH_FIELD_SIZE,
    MASK32,
    MASK64,
    PAD_BYTE,
    SHIFTS,
    WORD_ORDER,
)
from .errors import ContextStateError


BytesLike = Union[bytes, bytearray, memoryview]

_BLOCK_STRUCT = struct.Struct("<16I")
_STATE_STRUCT = struct.Struct("<4I")
_LENGTH_STRUCT = struct.Struct("<Q")

_STEPS = tuple(zip(range(64), CONSTANTS, SHIFTS, WORD_ORDER))


def _rotl32(v: int, n: int) -> int:
    return ((v << n) & MASK32) | (v >> (32 - n))


def _compress(state: list[int], block) -> None:
    """Mix one 64-byte block into ``state`` in place."""
    words = _BLOCK_STRUCT.unpack(block)
    a, b, c, d = state

    for i, k, s, g in _STEPS:
        if i < 16:
            f = (b & c) | (~b & d)
        elif i < 32:
            f = (d & b) | (~d & c)
        elif i < 48:
            f = b ^ c ^ d
        else:
            f = c ^ (b | ~d)
        f = (f + a + k + words[g]) & MASK32
        a, d, c = d, c, b
        b = (b + _rotl32(f, s)) & MASK32

    state[0] = (state[0] + a) & MASK32
    state[1] = (state[1] + b) & MASK32
    state[2] = (state[2] + c) & MASK32
    state[3] = (state[3] + d) & MASK32


def _as_view(data: BytesLike) -> memoryview:
    """Return a flat, C-contiguous byte view of ``data``.

    Strided or otherwise non-contiguous views are copied first, so the
    block loop can slice and unpack them without touching the context.
    """
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    view = memoryview(data)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _padding(total_length: int) -> bytes:
    used = total_length % BLOCK_SIZE
    # 0x80 plus zeros up to 56 mod 64, leaving room for the length field
    zeros = (BLOCK_SIZE - LENGTH_FIELD_SIZE - 1 - used) % BLOCK_SIZE
    bit_length = (total_length * 8) & MASK64
    return bytes([PAD_BYTE]) + bytes(zeros) + _LENGTH_STRUCT.pack(bit_length)


class Md5Phase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    FRESH = "fresh"
    ABSORBING = "absorbing"
    FINALIZED = "finalized"


class Md5Context:
    """Mutable MD5 hashing session.

    A freshly constructed context must be started with :meth:`begin` (or
    created through :meth:`new`). After :meth:`result` the context is spent:
    further updates or a second result raise :class:`ContextStateError` until
    :meth:`begin` is called again.

    Contexts are not thread-safe; callers sharing one must lock around it.
    """

    __slots__ = ("state", "buffer", "buffered_length", "total_length", "phase")

    def __init__(self):
        self.state = list(INIT_STATE)
        self.buffer = bytearray(BLOCK_SIZE)
        self.buffered_length = 0
        self.total_length = 0
        self.phase = Md5Phase.UNINITIALIZED

    @classmethod
    def new(cls, data: BytesLike = b"") -> "Md5Context":
        ctx = cls().begin()
        if data:
            ctx.update(data)
        return ctx

    def __repr__(self) -> str:
        return (
            f"Md5Context(phase={self.phase.value}, total_length={self.total_length}, "
            f"buffered_length={self.buffered_length})"
        )

    def begin(self) -> "Md5Context":
        self.state[:] = INIT_STATE
        self.buffer[:] = bytes(BLOCK_SIZE)
        self.buffered_length = 0
        self.total_length = 0
        self.phase = Md5Phase.FRESH
        return self

    def update(self, data: BytesLike) -> None:
        """Absorb ``data`` (any length, including zero).

        Accepts ``bytes``, ``bytearray`` or a ``memoryview``; non-contiguous
        views are copied to a contiguous buffer before anything is absorbed.
        """
        view = _as_view(data)
        self._require_open("update")
        self.phase = Md5Phase.ABSORBING
        if not view:
            return
        self._absorb(view)
        self.total_length += len(view)

    def result(self) -> bytes:
        """Pad, process the final block(s) and return the 16-byte digest."""
        self._require_open("result")
        self._absorb(memoryview(_padding(self.total_length)))
        self.phase = Md5Phase.FINALIZED
        return _STATE_STRUCT.pack(*self.state)

    def hexdigest(self) -> str:
        return self.result().hex()

    def copy(self) -> "Md5Context":
        """Return an independent context that continues from the same point."""
        self._require_open("copy")
        other = type(self)()
        other.state[:] = self.state
        other.buffer[:] = self.buffer
        other.buffered_length = self.buffered_length
        other.total_length = self.total_length
        other.phase = self.phase
        return other

    def _require_open(self, op: str) -> None:
        if self.phase is Md5Phase.UNINITIALIZED:
            raise ContextStateError(f"{op}() called on a context that was never begun")
        if self.phase is Md5Phase.FINALIZED:
            raise ContextStateError(f"{op}() called on a finalized context; call begin() first")

    def _absorb(self, view: memoryview) -> None:
        n = len(view)
        pos = 0
        held = self.buffered_length

        if held:
            take = min(BLOCK_SIZE - held, n)
            self.buffer[held : held + take] = view[:take]
            held += take
            pos = take
            if held < BLOCK_SIZE:
                self.buffered_length = held
                return
            _compress(self.state, self.buffer)
            held = 0

        while n - pos >= BLOCK_SIZE:
            _compress(self.state, view[pos : pos + BLOCK_SIZE])
            pos += BLOCK_SIZE

        rest = n - pos
        if rest:
            self.buffer[:rest] = view[pos:]
        self.buffered_length = rest


def begin(ctx: Md5Context) -> Md5Context:
    return ctx.begin()


def update(ctx: Md5Context, data: BytesLike) -> None:
    ctx.update(data)


def result(ctx: Md5Context) -> bytes:
    return ctx.result()


def md5(data: BytesLike = b"") -> bytes:
    """One-shot digest of a single contiguous buffer."""
    return Md5Context.new(data).result()


__all__ = [
    "BytesLike",
    "DIGEST_SIZE",
    "Md5Context",
    "Md5Phase",
    "begin",
    "md5",
    "result",
    "update",
]
