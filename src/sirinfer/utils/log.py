"""Logging setup for sirinfer.

`use_logging` configures the package wide logger, retrievable anywhere with
`logging.getLogger("sirinfer")`.
"""

import datetime
import logging
import os
import sys
from typing import Literal

from .custom_log_formatter import CustomLogFormatter

logger = logging.getLogger("sirinfer")

LOG_FORMAT = (
    "[%(levelname)s] %(asctime)s - %(filename)s - %(funcName)s: %(message)s"
)
DATE_FORMAT = "%Y-%m-%d_%H:%M:%S"

_LEVELS = {
    "none": logging.CRITICAL + 1,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def use_logging(
    level: Literal[
        "none", "debug", "info", "warn", "error", "critical"
    ] = "info",
    output: Literal["file", "console", "both"] = "console",
    log_path: str = "./logs",
) -> logging.Logger:
    """Set or disable logging within the sirinfer package.

    Parameters
    ----------
    level : str, optional
        Log level desired. Choices from "none", "debug", "info", "warn",
        "error" and "critical". Defaults to "info".
    output : str, optional
        Output for logs. Choices from "console", "file", and "both".
        Defaults to "console".
    log_path : str, optional
        folder path to store log files when `output` includes "file".
        Defaults to "./logs".

    Returns
    -------
    logging.Logger
        the configured "sirinfer" logger.

    Notes
    -----
    A level of "none" is logging.CRITICAL + 1, silencing every record.
    """
    # clear handlers to avoid duplicated output on repeated calls
    logger.handlers.clear()
    log_level = _LEVELS.get(level.lower())
    if log_level is None:
        print(f"Did not recognize {level} as a valid log level. Using INFO.")
        log_level = logging.INFO
    logger.setLevel(log_level)

    formatter = CustomLogFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []
    output = output.lower()
    if output.startswith(("file", "both")):
        os.makedirs(log_path, exist_ok=True)
        now_string = f"{datetime.datetime.now():%Y-%m-%d_%Hh-%Mm-%Ss}"
        logfile = os.path.join(log_path, f"{now_string}.log")
        handlers.append(logging.FileHandler(logfile))
    if output.startswith(("console", "both")) or not handlers:
        if not output.startswith(("console", "both")):
            print(f"Did not recognize {output}. Logging to stdout.")
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
    return logger
