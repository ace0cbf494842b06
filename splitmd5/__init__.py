"""
splitmd5: MD5 over discontiguous buffers.

Features:

- Incremental MD5 engine (begin/update/result) whose digest is independent of
  how the input was chunked; misuse of a spent context raises instead of
  producing a wrong digest.
- Two-buffer entry point that writes into a caller-supplied 16-byte buffer,
  plus N-buffer and ring-buffer-window helpers.
- Optional, off-by-default diagnostic dump (MDEBUG=1 or --debug on the CLI).
- Cross-checks against PyCryptodomex and a `splitmd5 selftest` command.
"""

__version__ = "0.1"

from .errors import ContextStateError, DigestMismatch, InvalidLengthError, Md5Error
from .md5 import Md5Context, Md5Phase, begin, md5, result, update
from .pair import digest_into, md5_2, md5_many, md5_window

__all__ = [
    "ContextStateError",
    "DigestMismatch",
    "InvalidLengthError",
    "Md5Context",
    "Md5Error",
    "Md5Phase",
    "begin",
    "digest_into",
    "md5",
    "md5_2",
    "md5_many",
    "md5_window",
    "result",
    "update",
]
