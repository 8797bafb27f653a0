"""
Configuration for reflectkit.

Defaults can be overridden from the environment and then from command-line
flags.

Environment Variables:
    REFLECTKIT_PRIVATE - Show private modules, types and members (1/true/yes)
    REFLECTKIT_INHERITED - Show members inherited from base classes
    REFLECTKIT_LOG_LEVEL - Logging level name (default WARNING)
    REFLECTKIT_PRELOAD - Comma-separated modules to import at startup
    NO_COLOR - Disable colored output when set to any value
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = env.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE


@dataclass(frozen=True)
class ReflectConfig:
    """Runtime settings shared by the CLI, navigator and renderer."""

    include_private: bool = False
    include_inherited: bool = False
    no_color: bool = False
    log_level: str = "WARNING"
    prompt: str = "reflect> "
    preload: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> ReflectConfig:
        """Build a config from environment variables."""
        env = os.environ if env is None else env
        defaults = cls()
        preload = tuple(
            name.strip() for name in env.get("REFLECTKIT_PRELOAD", "").split(",") if name.strip()
        )
        return cls(
            include_private=_env_flag(env, "REFLECTKIT_PRIVATE", defaults.include_private),
            include_inherited=_env_flag(env, "REFLECTKIT_INHERITED", defaults.include_inherited),
            no_color="NO_COLOR" in env,
            log_level=env.get("REFLECTKIT_LOG_LEVEL", defaults.log_level).upper(),
            preload=preload,
        )

    def with_overrides(self, **overrides: Any) -> ReflectConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())
