"""Logging setup for the CLI."""

from __future__ import annotations

import logging

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Route all records to a single stderr handler on the root logger."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(
        logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT),
    )
    stream_handler.setLevel(level)
    root_logger.addHandler(stream_handler)

    return logging.getLogger("recon_runner")
