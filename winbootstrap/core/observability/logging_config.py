"""
Logging configuration — central setup for the CLI entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Two handlers:
    - console (stderr): coloured, ``[LEVEL] message``
    - run log file:     ``[YYYY-mm-dd HH:MM:SS] [LEVEL] message``,
                        one file per run, always DEBUG

Level names follow the run log contract: DEBUG, INFO, WARN, ERROR and
an extra SUCCESS level between INFO and WARN.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

import click

SUCCESS = 25

logging.addLevelName(SUCCESS, "SUCCESS")
logging.addLevelName(logging.WARNING, "WARN")

# ── Format strings ──────────────────────────────────────────────

_FMT_CONSOLE = "[%(levelname)s] %(message)s"
_FMT_CONSOLE_DEBUG = "[%(levelname)s] %(name)s:%(lineno)d — %(message)s"

_FMT_FILE = "[%(asctime)s] [%(levelname)s] %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLOURS = {
    "DEBUG": "bright_black",
    "INFO": "cyan",
    "SUCCESS": "green",
    "WARN": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


class ColourFormatter(logging.Formatter):
    """Colour whole console lines by level."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        colour = _LEVEL_COLOURS.get(record.levelname)
        if colour is None:
            return message
        return click.style(message, fg=colour, bold=record.levelno >= logging.ERROR)


def run_log_path(log_dir: Path, started: datetime | None = None) -> Path:
    """Per-run log file named after the start timestamp."""
    stamp = (started or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return log_dir / f"bootstrap_{stamp}.log"


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
) -> Path | None:
    """Configure Python logging for the entire process.

    Args:
        level: Console log level name (DEBUG, INFO, WARN, ERROR).
        log_file: Optional run log path.  Its directory is created.

    Returns:
        The log file actually opened, or None if there is none.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    fmt = _FMT_CONSOLE_DEBUG if numeric_level <= logging.DEBUG else _FMT_CONSOLE
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(ColourFormatter(fmt))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(logging.DEBUG if log_file else numeric_level)

    # ── Run log file (append-only) ──────────────────────────────
    opened: Path | None = None
    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            logging.getLogger(__name__).warning(
                "Cannot open log file %s: %s — logging to console only", log_file, e,
            )
            root.setLevel(numeric_level)
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
            root.addHandler(fh)
            opened = log_file

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
    return opened


def log_success(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log at the SUCCESS level."""
    logger.log(SUCCESS, msg, *args)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    name = level.upper()
    if name == "WARN":
        return logging.WARNING
    if name == "SUCCESS":
        return SUCCESS
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
