"""Centralized Logging Management for polydate

Library modules only ask for named loggers. Handlers are installed on demand
by applications (the CLI) through ``LoggingManager.configure``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        log_message = super().format(record)
        return f"{self.COLORS.get(record.levelname, '')}{log_message}{self.COLORS['RESET']}"


class LoggingManager:
    """Centralized logging configuration and management."""

    ROOT_LOGGER = "polydate"

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return

        self.loggers: Dict[str, logging.Logger] = {}
        # Library default: silent unless the application configures handlers
        logging.getLogger(self.ROOT_LOGGER).addHandler(logging.NullHandler())
        self._initialized = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Class method to get logger instance.

        Args:
            name: Logger name (typically __name__ of the module)

        Returns:
            Configured logger
        """
        manager = cls()
        return manager._get_logger_instance(name)

    def _get_logger_instance(self, name: str) -> logging.Logger:
        """Internal method to get logger instance."""
        if name in self.loggers:
            return self.loggers[name]

        logger = logging.getLogger(name)
        self.loggers[name] = logger
        return logger

    @classmethod
    def configure(cls, level: str = "WARNING", log_file: Optional[Path] = None,
                  colored: bool = True) -> logging.Logger:
        """Install console (and optional rotating file) handlers on the package logger.

        Args:
            level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional path for a rotating debug log
            colored: Whether console output uses ANSI colors

        Returns:
            The package root logger
        """
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')

        cls()
        root_logger = logging.getLogger(cls.ROOT_LOGGER)
        root_logger.setLevel(logging.DEBUG)

        # Clearing handlers from a previous configure() call
        for handler in list(root_logger.handlers):
            if not isinstance(handler, logging.NullHandler):
                root_logger.removeHandler(handler)
                handler.close()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        formatter_cls = ColoredFormatter if colored else logging.Formatter
        console_handler.setFormatter(formatter_cls(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        root_logger.addHandler(console_handler)

        if log_file is not None:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(file_handler)

        return root_logger

    @classmethod
    def set_log_level(cls, level: str):
        """Set the console logging level.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')

        root_logger = logging.getLogger(cls.ROOT_LOGGER)
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(
                handler, logging.FileHandler
            ):
                handler.setLevel(numeric_level)
