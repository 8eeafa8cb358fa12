"""Runtime configuration: logging for CLI runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from SearchDSL.config.common import expect_bool, expect_str, get_section

LOG_LEVEL_ENV = "SEARCH_DSL_LOG_LEVEL"
_ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings.

    Attributes:
        level: Console log level. ``SEARCH_DSL_LOG_LEVEL`` overrides the file.
        to_file: Mirror logs to ``<dir>/<action>-<YYYYmmdd-HHMMSS>.log``.
        dir: Base log directory.
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load the optional ``log`` section.

    Raises:
        TypeError: If a value has the wrong type.
    """
    section = get_section(raw, "log", required=False)
    defaults = RuntimeConfig()
    level = expect_str(section.get("level", defaults.level), "log.level")
    env_level = os.getenv(LOG_LEVEL_ENV, "").strip()
    return RuntimeConfig(
        level=(env_level or level).upper(),
        to_file=expect_bool(section.get("to_file", defaults.to_file), "log.to_file"),
        dir=expect_str(section.get("dir", defaults.dir), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {list(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file=true")
