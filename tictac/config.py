"""
Environment configuration.

    TICTAC_THINK_DELAY   seconds the game loop waits before the automa moves
    TICTAC_LOG_LEVEL     log level the CLI configures
    TICTAC_DEFAULT_SIDE  human side for `tictac play` without --side
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os

from .engine_core.state import Side


@dataclass(frozen=True)
class Settings:
    think_delay: float = 0.0
    log_level: str = "WARNING"
    default_side: Side = Side.X

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Load settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        raw_delay = env.get("TICTAC_THINK_DELAY", "0")
        try:
            think_delay = float(raw_delay)
        except ValueError:
            raise ValueError(f"TICTAC_THINK_DELAY must be a number, got {raw_delay!r}") from None
        if think_delay < 0:
            raise ValueError(f"TICTAC_THINK_DELAY must not be negative, got {raw_delay!r}")

        log_level = env.get("TICTAC_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"TICTAC_LOG_LEVEL is not a log level: {log_level!r}")

        raw_side = env.get("TICTAC_DEFAULT_SIDE", "X").upper()
        try:
            default_side = Side(raw_side)
        except ValueError:
            raise ValueError(f"TICTAC_DEFAULT_SIDE must be X or O, got {raw_side!r}") from None

        return cls(think_delay=think_delay, log_level=log_level, default_side=default_side)
