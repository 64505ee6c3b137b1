from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_PREFIX = "CHESSCORE_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP session layer and the bot.

    Every field can be overridden with a ``CHESSCORE_<FIELD>`` environment
    variable, e.g. ``CHESSCORE_BOT_DEPTH=3``.
    """

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    search_depth: int = 3  # default for /search when the request omits it
    bot_depth: int = 3
    max_depth: int = 6  # cap on requested depths; search cost is exponential
    movetime_ms: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables over the defaults.

        Raises:
            ValueError: If a numeric setting is not an integer or a depth is
                out of range.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer") from e

        settings = cls(
            host=env.get(ENV_PREFIX + "HOST", defaults.host),
            port=_int("port", defaults.port),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
            search_depth=_int("search_depth", defaults.search_depth),
            bot_depth=_int("bot_depth", defaults.bot_depth),
            max_depth=_int("max_depth", defaults.max_depth),
            movetime_ms=_int("movetime_ms", defaults.movetime_ms),
        )
        for name in ("search_depth", "bot_depth"):
            value = getattr(settings, name)
            if value < 1 or value > settings.max_depth:
                raise ValueError(f"{name} must be between 1 and {settings.max_depth}")
        return settings
