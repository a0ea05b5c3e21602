"""
Logging utilities for the xkpasswd passphrase generator.
"""

import logging
import os
import sys
from typing import Optional


class Logger:
    """Custom logger for xkpasswd

    Console output goes to stderr so log lines never mix with the
    generated passwords on stdout.
    """

    # Log levels
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    def __init__(self, name: str = "xkpasswd", log_file: Optional[str] = None,
                 level: int = logging.WARNING, console: bool = True):
        """Initialize the logger

        Args:
            name: Logger name
            log_file: Optional file to log to
            level: Logging level
            console: Whether to log to the console (stderr)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def get_logger(self):
        """Get the logger instance"""
        return self.logger


default_logger = logging.getLogger("xkpasswd")


def debug(msg: str, *args, **kwargs):
    """Log a debug message"""
    default_logger.debug(msg, *args, **kwargs)

