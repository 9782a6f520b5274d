"""Runtime settings for the emitter.

Settings are plain dataclass fields; ``EmitterSettings.from_env`` fills them
from ``EMITTER_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

MIN_ID_LENGTH = 8

_TRUTHY = ("1", "true", "True")


@dataclass
class EmitterSettings:
    """Emitter configuration."""

    # Listener ids
    id_length: int = 21

    # Listener failures
    isolate_errors: bool = False
    max_errors: int = 100

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self) -> None:
        if self.id_length < MIN_ID_LENGTH:
            raise ValueError(f"id_length must be at least {MIN_ID_LENGTH}, got {self.id_length}")
        if self.max_errors < 0:
            raise ValueError(f"max_errors must not be negative, got {self.max_errors}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EmitterSettings:
        """Load configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            EmitterSettings instance
        """
        env = os.environ if environ is None else environ
        return cls(
            id_length=_int_env(env, "EMITTER_ID_LENGTH", 21),
            isolate_errors=env.get("EMITTER_ISOLATE_ERRORS", "0") in _TRUTHY,
            max_errors=_int_env(env, "EMITTER_MAX_ERRORS", 100),
            log_level=env.get("EMITTER_LOG_LEVEL", "INFO"),
            json_logs=env.get("EMITTER_JSON_LOGS", "0") in _TRUTHY,
        )


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
