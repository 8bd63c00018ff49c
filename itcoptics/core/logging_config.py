"""
Logging configuration for itc-optics.

All loggers live under the ``itcoptics`` namespace, one per module
(``itcoptics.calibration.table``, ``itcoptics.instrument.grating``, ...), so
an application embedding the optics model can tune them as one tree.
Calibration loads and constructed optics are logged at INFO, cache traffic
at DEBUG.
"""

import logging
import sys
from typing import Optional

LOGGER_ROOT = "itcoptics"
DEFAULT_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: str = "INFO", format_string: Optional[str] = None, stream: Optional[object] = None
) -> None:
    """
    Configure the root handler for itc-optics command-line use.

    Parameters
    ----------
    level : str
        One of LOG_LEVELS, case-insensitive
    format_string : str, optional
        Custom format string. If None, uses DEFAULT_FORMAT.
    stream : file-like object, optional
        Stream to write logs to. If None, uses sys.stderr.

    Raises
    ------
    ValueError
        If `level` is not a known level name
    """
    if level.upper() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}. Must be one of: {', '.join(LOG_LEVELS)}")

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=DEFAULT_FORMAT if format_string is None else format_string,
        stream=sys.stderr if stream is None else stream,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger of an itc-optics module.

    Parameters
    ----------
    name : str
        Module path relative to the package (e.g. 'instrument.gmos')

    Returns
    -------
    logging.Logger
        The ``itcoptics.<name>`` logger
    """
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")
