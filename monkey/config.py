"""
Monkey Configuration
====================
Driver settings for the REPL and CLI. The library core takes no
configuration; everything here is about how the driver behaves.

Precedence (lowest → highest): defaults, environment variables, CLI flags.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

ENV_PROMPT = "MONKEY_PROMPT"
ENV_LOG_LEVEL = "MONKEY_LOG_LEVEL"
ENV_NO_BANNER = "MONKEY_NO_BANNER"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    """Settings for the Monkey driver."""

    prompt: str = ">> "         # REPL input prompt
    show_banner: bool = True    # Print the welcome banner on REPL start
    log_level: str = "WARNING"  # Root logging level for the CLI

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a Config from defaults overlaid with MONKEY_* variables."""
        environ = os.environ if environ is None else environ
        config = cls()

        if ENV_PROMPT in environ:
            config = replace(config, prompt=environ[ENV_PROMPT])
        if ENV_LOG_LEVEL in environ:
            config = replace(config, log_level=normalize_log_level(environ[ENV_LOG_LEVEL]))
        if environ.get(ENV_NO_BANNER, "").strip().lower() not in _FALSY:
            config = replace(config, show_banner=False)

        return config

    def merged(self, **overrides) -> Config:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "log_level" in changes:
            changes["log_level"] = normalize_log_level(changes["log_level"])
        return replace(self, **changes)


def normalize_log_level(level: str) -> str:
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (choose from {', '.join(LOG_LEVELS)})")
    return name
