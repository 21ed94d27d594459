"""
Logging configuration for the NoiseStreamer.
"""

import logging
import logging.handlers
import os
import sys
import time
from typing import Optional, Union

LOGGER_NAME = "NoiseStreamer"

# Thread name identifies the output stream
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s'


class LoggingManager:
    """Singleton tracking which loggers have handlers attached."""
    _instance = None
    _configured_loggers = set()

    @classmethod
    def get_instance(cls):
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = LoggingManager()
        return cls._instance

    def is_logger_configured(self, logger_name: str) -> bool:
        return logger_name in self._configured_loggers

    def mark_logger_configured(self, logger_name: str) -> None:
        self._configured_loggers.add(logger_name)

    def reset(self, logger_name: str) -> None:
        """Detach and close all handlers so the logger can be configured again."""
        logger = logging.getLogger(logger_name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        self._configured_loggers.discard(logger_name)


def _resolve_level(verbose: bool, log_level: Optional[Union[int, str]]) -> int:
    if log_level is None:
        return logging.DEBUG if verbose else logging.INFO
    if isinstance(log_level, str):
        return getattr(logging, log_level.upper(), logging.INFO)
    return log_level


def _file_handler(log_file: Optional[str], rotate: bool, max_bytes: int, backup_count: int) -> logging.Handler:
    if not log_file:
        log_file = f"noisestreamer_{time.strftime('%Y%m%d_%H%M%S')}.log"
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    if rotate:
        return logging.handlers.RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
    return logging.FileHandler(log_file)


def setup_logging(
    verbose: bool = False,
    log_to_file: bool = False,
    log_file: Optional[str] = None,
    log_level: Optional[Union[int, str]] = None,
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the application logger once per process.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_to_file: Also write to a file
        log_file: Path to log file (defaults to noisestreamer_{timestamp}.log in cwd)
        log_level: Explicit level, overrides verbose
        enable_rotation: Rotate the log file by size
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        The "NoiseStreamer" logger
    """
    manager = LoggingManager.get_instance()
    logger = logging.getLogger(LOGGER_NAME)
    if manager.is_logger_configured(logger.name):
        return logger

    level = _resolve_level(verbose, log_level)
    logger.setLevel(level)
    formatter = logging.Formatter(DEFAULT_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        handlers.append(_file_handler(log_file, enable_rotation, max_bytes, backup_count))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    manager.mark_logger_configured(logger.name)
    logger.debug(f"Logging initialized at level: {logging.getLevelName(level)}")
    if log_to_file:
        logger.info(f"Logging to file: {handlers[-1].baseFilename}")

    return logger
