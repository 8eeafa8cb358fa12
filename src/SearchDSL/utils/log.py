"""SearchDSL logging utilities.

One package logger, ``log``, shared by the compiler, the engine client and the
service layer. Lines look like ``10-19 14:02:11 [WARN] Query compiled with 2
skipped clause(s)``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final, TextIO


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("SearchDSL")


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
    stream: TextIO | None = None,
) -> None:
    """(Re)configure the SearchDSL logger.

    The console handler writes to stderr by default so stdout stays free for
    the JSON the CLI prints. With ``log_to_file`` and an ``action``, every
    record down to DEBUG is mirrored to ``<log_dir>/<action>-<timestamp>.log``.

    Args:
        level: Console level name; unknown names fall back to INFO.
        action: CLI command name, used in the log file name.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Directory for log files.
        stream: Console stream override.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO
    formatter = _AbbrevLevelFormatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    console.setFormatter(formatter)

    log.handlers.clear()
    log.addHandler(console)
    log.setLevel(console_level)
    if log_to_file and action:
        log.addHandler(_file_handler(Path(log_dir or "log"), action, formatter))
        log.setLevel(logging.DEBUG)
    log.propagate = False


def _file_handler(directory: Path, action: str, formatter: logging.Formatter) -> logging.Handler:
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    handler = logging.FileHandler(directory / f"{action}-{stamp}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler
