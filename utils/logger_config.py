"""
Unified logging configuration for the NCCR stereo disparity toolkit.

Every module obtains its logger through ``get_logger(__name__)``; loggers are
children of a single ``stereo_nccr`` root logger that owns the handlers.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class LoggerConfig:
    """Centralized logger configuration manager."""

    _configured = False
    _root_logger_name = 'stereo_nccr'
    _format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @classmethod
    def setup_root_logger(
        cls,
        level: int = logging.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[Path] = None,
        force: bool = False
    ) -> logging.Logger:
        """
        Setup the root logger for the entire application.

        Args:
            level: Logging level (default: INFO)
            format_string: Custom format string (optional)
            log_file: Optional file path for logging to file
            force: Replace an existing configuration

        Returns:
            logging.Logger: Configured root logger
        """
        root_logger = logging.getLogger(cls._root_logger_name)
        if cls._configured and not force:
            return root_logger

        root_logger.setLevel(level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(format_string or cls._format_string)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        root_logger.propagate = False
        cls._configured = True

        root_logger.debug(f"Root logger configured: level={logging.getLevelName(level)}")
        if log_file:
            root_logger.info(f"Logging to file: {log_file}")

        return root_logger

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a child logger of the application root logger.

        Args:
            name: Logger name (typically __name__ from calling module)
        """
        if not cls._configured:
            cls.setup_root_logger()

        logger = logging.getLogger(f"{cls._root_logger_name}.{name}")
        logger.propagate = True
        return logger

    @classmethod
    def set_level(cls, level: Union[int, str]) -> None:
        """
        Change the logging level of the root logger and all its handlers.

        Args:
            level: New logging level, as a number or one of LOG_LEVELS
        """
        level = parse_level(level)
        root_logger = logging.getLogger(cls._root_logger_name)
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)

        root_logger.debug(f"Logging level changed to: {logging.getLevelName(level)}")

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def root_logger_name(cls) -> str:
        return cls._root_logger_name


def parse_level(level: Union[int, str]) -> int:
    """
    Convert a level name such as ``"debug"`` to its numeric value.

    Raises:
        ValueError: If the name is not one of LOG_LEVELS
    """
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})")
    return logging.getLevelName(name)


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get a properly configured logger."""
    return LoggerConfig.get_logger(name)


# Configure the default handlers as soon as any module asks for a logger
if not LoggerConfig.is_configured():
    LoggerConfig.setup_root_logger()
