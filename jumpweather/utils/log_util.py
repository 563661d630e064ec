"""
Logging helpers shared by every jumpweather module.

Each module creates its own logger with ``logger = app_logger(__name__)``.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def app_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Return a configured logger.

    :param name: Logger name, usually the module ``__name__``
    :param log_file: Optional file path that also receives the log records
    :return: logging.Logger with a console handler (and file handler if requested)
    """
    logger = logging.getLogger(name)
    level = os.environ.get("JUMPWEATHER_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)

    # Handlers are attached once per logger name
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        logger.propagate = False

    return logger
