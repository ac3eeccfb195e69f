"""Logging setup for the add_border command line."""

from __future__ import annotations

import logging
import sys

LOG_LEVEL_CHOICES = ("debug", "info", "warning", "error", "critical")

# Levels reached by -v/-q, indexed by verbose - quiet + 2 (clamped).
_VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)


def add_logging_args(parser) -> None:
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Set log verbosity explicitly (overrides -v/-q)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show per-image debug output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Hide progress and info messages (-qq for errors only)",
    )


def resolve_log_level(log_level: str | None = None, verbose: int = 0, quiet: int = 0) -> int:
    """Numeric level for --log-level, or for the net -v/-q count."""
    if log_level:
        return logging.getLevelName(log_level.upper())
    index = min(max(verbose - quiet + 2, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def configure_logging(log_level: str | None = None, verbose: int = 0, quiet: int = 0) -> int:
    """Send log records to stderr at the resolved level and return it.

    If the root logger already has handlers (pytest, an embedding GUI) only
    their levels are adjusted.
    """
    level = resolve_log_level(log_level, verbose, quiet)
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    return level
