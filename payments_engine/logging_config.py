"""Logging setup shared by the CLI and the Streamlit front-end.

Log records go to stderr so that the accounts CSV on stdout stays clean.
"""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "payments_engine.stderr"

NOISY_LOGGERS = [
    "streamlit",
    "urllib3",
    "asyncio",
]


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Only our own handler is replaced.
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
