"""
Logging configuration for requester

Module loggers live under the "requester" namespace. Nothing is printed unless
the application calls setup_logging() or configures logging itself.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "requester"


class RequesterLogger:
    """Centralized logger for the package"""

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        log_file: Path | None = None,
        console_output: bool = True,
        level: int = logging.DEBUG,
    ):
        """
        Initialize logger

        Args:
            name: Logger name (usually "requester" for the package logger)
            log_file: Path to log file (optional)
            console_output: Whether to print to console
            level: Level of the logger itself
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Clear existing handlers
        self.logger.handlers = []

        # Format: timestamp - module - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance"""
        return self.logger


def setup_logging(
    log_file: Path | None = None, verbose: bool = True, level: int = logging.DEBUG
) -> logging.Logger:
    """
    Attach console and/or file handlers to the package logger

    Args:
        log_file: Optional file receiving DEBUG and above
        verbose: Whether to also print INFO and above to stdout
        level: Level of the package logger

    Returns:
        Configured logger instance
    """
    return RequesterLogger(log_file=log_file, console_output=verbose, level=level).get_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'request', 'handlers')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
