from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from SearchDSL.config.compiler import CompilerConfig, check_compiler, load_compiler
from SearchDSL.config.engine import EngineConfig, check_engine, load_engine
from SearchDSL.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    engine: EngineConfig
    compiler: CompilerConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a merged config mapping into AppConfig, validating every domain."""
    runtime = load_runtime(raw)
    engine = load_engine(raw)
    compiler = load_compiler(raw)

    check_runtime(runtime)
    check_engine(engine)
    check_compiler(compiler)

    return AppConfig(runtime=runtime, engine=engine, compiler=compiler)


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    defaults_text: str | None = None,
) -> AppConfig:
    """Load config by deep-merging an override file over the defaults.

    Args:
        config_path: Override YAML file.
        default_path: Defaults YAML file; skipped when it does not exist.
        defaults_text: Defaults as YAML text; takes precedence over `default_path`.
    """
    if defaults_text is None:
        if config_path == default_path or not default_path.is_file():
            return load_config(config_path)
        defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; lists are replaced, not merged."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
