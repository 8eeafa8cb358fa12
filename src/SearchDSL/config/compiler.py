"""Compiler policy configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchDSL.config.common import expect_bool, expect_int, get_section
from SearchDSL.core.models import DEFAULT_PAGE_SIZE


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Compiler behavior.

    Attributes:
        strict: Raise on malformed clauses instead of skipping them.
        default_size: Page size used when a request asks for 0 or nothing.
    """

    strict: bool = False
    default_size: int = DEFAULT_PAGE_SIZE


def load_compiler(raw: Mapping[str, Any]) -> CompilerConfig:
    section = get_section(raw, "compiler", required=False)
    return CompilerConfig(
        strict=expect_bool(section.get("strict", False), "compiler.strict"),
        default_size=expect_int(section.get("default_size", DEFAULT_PAGE_SIZE), "compiler.default_size"),
    )


def check_compiler(config: CompilerConfig) -> None:
    if config.default_size <= 0:
        raise ValueError("compiler.default_size must be positive")
