"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class Settings:
    verbose: bool = False  # log a summary line for every parsed trade
    log_level: str = "INFO"
    chunk_size: int = 1000  # rows per pandas read_csv chunk
    injected_fields: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> Settings:
        injected = os.environ.get("TRADESTREAM_INJECTED_FIELDS", "")
        return cls(
            verbose=_env_bool("TRADESTREAM_VERBOSE"),
            log_level=os.environ.get("TRADESTREAM_LOG_LEVEL", "INFO").upper(),
            chunk_size=int(os.environ.get("TRADESTREAM_CHUNK_SIZE", "1000")),
            injected_fields=tuple(f.strip() for f in injected.split(",") if f.strip()),
        )
