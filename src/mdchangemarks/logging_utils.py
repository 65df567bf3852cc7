"""Logging setup shared by the mdchangemarks commands."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _make_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    return logging.Formatter(_PLAIN_FORMAT)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the console (and optional file) handlers on the root logger.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``.
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = logging.getLevelName(str(log_level).upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = _make_formatter(trace_mode)
    _attach(root_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            _attach(root_logger, logging.FileHandler(log_file, mode="a", encoding="utf-8"), level, formatter)
        except OSError as exc:
            root_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            root_logger.info("Logging to file: %s", log_file)

    return root_logger


def resolve_log_level(log_level: str = "WARNING", verbose: bool = False, trace: bool = False) -> int:
    """Resolve the effective level from the CLI logging flags.

    ``--trace`` takes precedence over ``--verbose``, which only lowers the
    level when ``--log-level`` was left at its default.

    Parameters
    ----------
    log_level : str, default "WARNING"
        Level name given with ``--log-level``.
    verbose : bool, default False
        Whether ``--verbose`` was passed.
    trace : bool, default False
        Whether ``--trace`` was passed.

    Returns
    -------
    int
        Numeric logging level.

    """
    if trace:
        return logging.DEBUG
    if verbose and log_level.upper() == "WARNING":
        return logging.INFO
    return getattr(logging, log_level.upper(), logging.WARNING)
