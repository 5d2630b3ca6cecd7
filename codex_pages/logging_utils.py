"""Logging setup shared by the command-line entry points."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

VERBOSE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(
    log_level: int | str,
    log_file: Path | None = None,
    *,
    verbose: bool = False,
) -> logging.Logger:
    """Configure the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``.
    log_file : Path, optional
        File that receives a copy of the log output.
    verbose : bool, default False
        Include timestamps and logger names in each record.

    Returns
    -------
    logging.Logger
        The configured root logger.
    """
    resolved_level = (
        log_level
        if isinstance(log_level, int)
        else getattr(logging, str(log_level).upper(), logging.INFO)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        VERBOSE_FORMAT if verbose else DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if verbose else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info("Logging to file: %s", log_file)

    return root_logger


__all__ = ["configure_logging"]
