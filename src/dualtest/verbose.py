"""Debug logging for test runs: per-test start and outcome lines plus suite reports."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "dualtest"
) -> logging.Logger:
    """
    Configure the logger that runners and suites write their progress to.

    Any handlers left from an earlier run are closed first, so `dualtest run`
    can be invoked repeatedly in one process. Records never propagate to the
    root logger, which keeps test output on stdout free of log lines.

    Args:
        debug_file: Path to debug log file (always created, parents included)
        verbose: If True, also echo every test start and outcome to stderr.
        logger_name: Name of the logger instance. Runner and suites log to
            "dualtest" unless handed another logger.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(debug_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger
