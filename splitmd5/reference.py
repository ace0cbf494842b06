"""Cross-checks against PyCryptodomex's MD5."""

from __future__ import annotations

from Cryptodome.Hash import MD5

from .errors import DigestMismatch
from .md5 import BytesLike
from .pair import md5_many


def reference_md5(*parts: BytesLike) -> bytes:
    h = MD5.new()
    for part in parts:
        h.update(part)
    return h.digest()


def checked_md5(*parts: BytesLike) -> bytes:
    """Return the engine digest of ``parts`` after confirming it with the reference.

    Raises:
        DigestMismatch: If the two implementations disagree.
    """
    ours = md5_many(*parts)
    theirs = reference_md5(*parts)
    if ours != theirs:
        raise DigestMismatch(f"engine digest {ours.hex()} != reference {theirs.hex()}")
    return ours
