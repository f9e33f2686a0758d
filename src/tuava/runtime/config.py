"""Runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

# Defaults
MAX_WORKERS = 4
INPUT_POLL_INTERVAL = 0.05   # How often the loop looks at the queue while waiting for keys
ESCAPE_TIMEOUT = 0.1         # How long to wait for the rest of an escape sequence
SHUTDOWN_TIMEOUT = 1.0

_FALSE_WORDS = {"0", "false", "no", "off"}
_TRUE_WORDS = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ProgramConfig:
    """Settings for a Program run."""
    max_workers: int = MAX_WORKERS
    alternate_screen: bool = True
    hide_cursor: bool = True
    input_poll_interval: float = INPUT_POLL_INTERVAL
    escape_timeout: float = ESCAPE_TIMEOUT
    shutdown_timeout: float = SHUTDOWN_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ProgramConfig:
        """
        Build a config from ``TUAVA_*`` environment variables.

        Recognised: TUAVA_MAX_WORKERS, TUAVA_ALT_SCREEN, TUAVA_HIDE_CURSOR,
        TUAVA_INPUT_POLL_INTERVAL, TUAVA_ESCAPE_TIMEOUT, TUAVA_SHUTDOWN_TIMEOUT.
        Unset or unparsable values keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()
        overrides = {}
        for f in fields(cls):
            name = f"TUAVA_{f.name.upper()}"
            if f.name == "alternate_screen":
                name = "TUAVA_ALT_SCREEN"
            raw = env.get(name)
            if raw is None:
                continue
            value = _parse(raw.strip(), type(getattr(config, f.name)))
            if value is not None:
                overrides[f.name] = value
        return replace(config, **overrides)


def _parse(raw: str, kind: type) -> Optional[object]:
    if kind is bool:
        lowered = raw.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        return None
    try:
        value = kind(raw)
    except ValueError:
        return None
    return value if value > 0 else None
