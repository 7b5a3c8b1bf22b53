"""Logging configuration and utilities."""

import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "folder_sync"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """Setup logging for the sync run.

    The run log is appended to ``log_file``; one line per notable event
    (file added, file excluded, volume copied, errors, ...).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to the run log (optional)
        log_to_console: Whether to also log to the console
        max_file_size: Maximum size of the log file before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Repeated setup (tests, several CLI invocations) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            mode='a',
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class TimedOperation:
    """Context manager for timing operations and logging results."""

    def __init__(self, logger: logging.Logger, operation_name: str, log_level: str = "INFO"):
        """Initialize timed operation.

        Args:
            logger: Logger to use
            operation_name: Name of the operation
            log_level: Log level for timing messages
        """
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = getattr(logging, log_level.upper())
        self.start_time: Optional[datetime] = None
        self.duration = 0.0

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.log(self.log_level, f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.duration = (datetime.now() - self.start_time).total_seconds()
            if exc_type is None:
                self.logger.log(self.log_level, f"Completed {self.operation_name} in {self.duration:.2f}s")
            else:
                self.logger.error(f"Failed {self.operation_name} after {self.duration:.2f}s: {exc_val}")
        return False
