"""Logging configuration for the command-line tool."""

from __future__ import annotations

import logging

from .config import Config


def setup_logging(config: Config) -> logging.Logger:
    logger = logging.getLogger("tiny_git")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | "
                "%(funcName)s | %(message)s"
            )
        )
        logger.addHandler(file_handler)
    return logger
