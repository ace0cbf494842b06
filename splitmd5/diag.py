"""Optional diagnostic dump for the two-buffer digest.

The dump writes raw input bytes (hex encoded) to a stream, so it stays off
unless a caller builds an enabled :class:`DiagnosticConfig`. The library never
consults the environment on its own; the CLI calls
:meth:`DiagnosticConfig.from_environment` once at start-up.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO


ENV_FLAG = "MDEBUG"


@dataclass(frozen=True)
class DiagnosticConfig:
    enabled: bool = False
    stream: Optional[TextIO] = None

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "DiagnosticConfig":
        """Enable the dump when ``MDEBUG`` is exactly ``"1"``."""
        env = os.environ if environ is None else environ
        return cls(enabled=env.get(ENV_FLAG) == "1")

    def emit(self, label: str, data) -> None:
        if not self.enabled:
            return
        out = self.stream if self.stream is not None else sys.stderr
        print(f"md5_2: {label} {bytes(data).hex()}", file=out)


DISABLED = DiagnosticConfig()
