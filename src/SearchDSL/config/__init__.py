from __future__ import annotations

"""Public configuration API for SearchDSL."""

from SearchDSL.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from SearchDSL.config.compiler import CompilerConfig
from SearchDSL.config.engine import EngineConfig
from SearchDSL.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "CompilerConfig",
    "EngineConfig",
    "RuntimeConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
