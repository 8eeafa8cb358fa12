"""Search engine connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import urlparse

from SearchDSL.config.common import (
    expect_bool,
    expect_float,
    expect_int,
    expect_str,
    expect_str_list,
    expect_str_mapping,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Connection settings handed to the engine client at construction.

    Attributes:
        hosts: Base URLs of the engine nodes; the transport spreads requests across them.
        username: HTTP basic auth user; empty disables auth.
        password: HTTP basic auth password, resolved from ``password_env``.
        headers: Extra headers sent with every request.
        max_retries: Retries after the first attempt on transient failures.
        gzip: Compress request bodies (``http_compress``).
        timeout: Per-request timeout in seconds.
    """

    hosts: tuple[str, ...]
    username: str = ""
    password: str = field(default="", repr=False)
    headers: Mapping[str, str] = field(default_factory=dict)
    max_retries: int = 3
    gzip: bool = False
    timeout: float = 30.0


def load_engine(raw: Mapping[str, Any]) -> EngineConfig:
    """Load the ``engine`` section.

    The password never lives in the YAML file: ``engine.password_env`` names
    the environment variable (or ``.env`` entry) that holds it.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "engine", required=True)
    hosts = expect_str_list(get_required_value(section, "hosts", "engine.hosts"), "engine.hosts")

    password = ""
    password_env = section.get("password_env")
    if password_env:
        password = os.getenv(expect_str(password_env, "engine.password_env"), "")

    return EngineConfig(
        hosts=tuple(h.strip().rstrip("/") for h in hosts if h.strip()),
        username=expect_str(section.get("username") or "", "engine.username"),
        password=password,
        headers=expect_str_mapping(section.get("headers"), "engine.headers"),
        max_retries=expect_int(section.get("max_retries", 3), "engine.max_retries"),
        gzip=expect_bool(section.get("gzip", False), "engine.gzip"),
        timeout=expect_float(section.get("timeout", 30), "engine.timeout"),
    )


def check_engine(config: EngineConfig) -> None:
    """Validate connection settings before any request is made.

    Raises:
        ValueError: If values violate engine constraints.
    """
    if not config.hosts:
        raise ValueError("engine.hosts must include at least one host")
    for host in config.hosts:
        parsed = urlparse(host)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"engine.hosts has invalid URL: {host}")
    if config.max_retries < 0:
        raise ValueError("engine.max_retries must be >= 0")
    if config.timeout <= 0:
        raise ValueError("engine.timeout must be positive")
    if config.password and not config.username:
        raise ValueError("engine.username is required when a password is set")
