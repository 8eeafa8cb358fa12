"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to the command runner.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO

import click
from dotenv import load_dotenv

from SearchDSL.cli.runner import CommandRunner
from SearchDSL.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


@click.group(help="SearchDSL: compile the JSON query DSL and run it on the search engine.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env before reading config, so
    ``engine.password_env`` can point at a .env entry.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("search")
@click.argument("index")
@click.argument("request_file", type=click.File("r", encoding="utf-8"))
@click.option("--from", "offset", type=int, default=None, help="Override the request's `from`.")
@click.option("--size", type=int, default=None, help="Override the request's `size`.")
@click.pass_context
def search_cmd(ctx: click.Context, index: str, request_file: TextIO, offset: int | None, size: int | None) -> None:
    """Run REQUEST_FILE (JSON, `-` for stdin) against INDEX and print the raw result."""
    runner = CommandRunner(ctx.obj)
    runner.run_search(ctx.command.name, index, _read_request(request_file), offset=offset, size=size)


@cli.command("compile")
@click.argument("request_file", type=click.File("r", encoding="utf-8"))
@click.pass_context
def compile_cmd(ctx: click.Context, request_file: TextIO) -> None:
    """Print the engine query compiled from REQUEST_FILE without running it."""
    runner = CommandRunner(ctx.obj)
    runner.run_compile(ctx.command.name, _read_request(request_file))


@cli.command("ping")
@click.pass_context
def ping_cmd(ctx: click.Context) -> None:
    """Check that the configured engine is reachable."""
    CommandRunner(ctx.obj).run_ping(ctx.command.name)


def _read_request(stream: TextIO) -> Any:
    """Read a request file: a JSON request object, or raw DSL text."""
    text = stream.read()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # compiles to match-all under the lenient policy
        return text
    return data if isinstance(data, dict) else text
