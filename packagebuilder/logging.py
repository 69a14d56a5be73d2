"""Logging for build runs.

Stage progress (files found, holders grouped, manifests written) and skipped
manifests are logged under the ``packagebuilder`` logger; ``--verbose`` adds
per-file debug output such as files without a type declaration.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "packagebuilder"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for one pipeline stage, e.g. ``get_logger("writer")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route build progress to stderr and, with ``log_file``, to a file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run several builds in one process; keep exactly one set of handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(
        logging.Formatter("[packagebuilder] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
