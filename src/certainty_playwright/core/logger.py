# src/certainty_playwright/core/logger.py
"""
Structured Logging for the Assertion Library

structlog on top of the standard library logging module. Configuration is
taken from the ``logging`` settings section the first time a logger is
requested, unless setup_logging() was called explicitly before.

Example:
    >>> setup_logging(log_level="DEBUG", enable_json_format=True)
    >>> logger = get_logger("eventual")
    >>> logger.debug("Replaying calls", count=2)
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

LIBRARY_LOGGER = "certainty_playwright"


class LoggingManager:
    """
    Central logging management.

    Owns the structlog configuration and the handlers attached to the
    library's stdlib logger. The root logger is left alone so the library
    does not hijack the host test runner's logging.
    """

    def __init__(self):
        self._configured = False
        self._loggers: Dict[str, structlog.stdlib.BoundLogger] = {}
        self._handlers: List[logging.Handler] = []

    @property
    def configured(self) -> bool:
        return self._configured

    def configure_logging(
            self,
            log_level: str = "WARNING",
            enable_console: bool = True,
            enable_file: bool = False,
            log_file_path: Optional[Path] = None,
            enable_json_format: bool = False,
            max_file_size_mb: int = 10,
            backup_count: int = 3
    ) -> None:
        """
        Configure the logging system with specified parameters.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_console: Enable console output
            enable_file: Enable file output
            log_file_path: Path to log file (default: logs/certainty.log)
            enable_json_format: Use structured JSON format
            max_file_size_mb: Maximum log file size in MB
            backup_count: Number of backup log files to keep
        """
        library_logger = logging.getLogger(LIBRARY_LOGGER)
        for handler in self._handlers:
            library_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self._loggers.clear()

        library_logger.setLevel(getattr(logging, log_level.upper()))
        library_logger.propagate = False

        processors = [
            structlog.stdlib.filter_by_level,
            self._add_timestamp,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
        ]

        if enable_json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )

        if enable_console:
            self._add_handler(library_logger, logging.StreamHandler(sys.stderr))

        if enable_file:
            log_path = log_file_path or Path("logs/certainty.log")
            log_path.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                library_logger,
                logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=max_file_size_mb * 1024 * 1024,
                    backupCount=backup_count,
                    encoding="utf-8"
                )
            )

        self._configured = True

    def _add_handler(self, library_logger: logging.Logger, handler: logging.Handler) -> None:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(message)s"))
        library_logger.addHandler(handler)
        self._handlers.append(handler)

    def _add_timestamp(self, logger, method_name, event_dict):
        """Add timestamp to log entries."""
        event_dict["timestamp"] = datetime.now().isoformat()
        return event_dict

    def configure_from_settings(self) -> None:
        """Configure from the ``logging`` section of the library settings."""
        from certainty_playwright.config.settings import get_settings

        section = get_settings().logging
        self.configure_logging(
            log_level=section.level,
            enable_console=section.console_enabled,
            enable_file=section.file_enabled,
            log_file_path=section.file_path,
            enable_json_format=section.json_format,
            max_file_size_mb=section.max_file_size_mb,
            backup_count=section.backup_count
        )

    def get_logger(self, name: str) -> structlog.stdlib.BoundLogger:
        """
        Get a configured logger instance.

        Args:
            name: Component name, nested under the library logger

        Returns:
            structlog.stdlib.BoundLogger: Configured logger instance
        """
        if not self._configured:
            self.configure_from_settings()

        if name not in self._loggers:
            self._loggers[name] = structlog.get_logger(f"{LIBRARY_LOGGER}.{name}")

        return self._loggers[name]

    def get_log_file_paths(self) -> List[Path]:
        """Get paths to all active log files."""
        return [
            Path(handler.baseFilename)
            for handler in self._handlers
            if isinstance(handler, logging.FileHandler)
        ]


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(
        log_level: str = "WARNING",
        enable_console: bool = True,
        enable_file: bool = False,
        log_file_path: Optional[Path] = None,
        enable_json_format: bool = False,
        max_file_size_mb: int = 10,
        backup_count: int = 3
) -> None:
    """
    Set up logging for the library explicitly, overriding the settings.

    Example:
        >>> setup_logging(
        ...     log_level="DEBUG",
        ...     enable_file=True,
        ...     log_file_path=Path("logs/assertions.log")
        ... )
    """
    _logging_manager.configure_logging(
        log_level=log_level,
        enable_console=enable_console,
        enable_file=enable_file,
        log_file_path=log_file_path,
        enable_json_format=enable_json_format,
        max_file_size_mb=max_file_size_mb,
        backup_count=backup_count
    )


def get_logger(name: str = "assertions") -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> logger = get_logger("element")
        >>> logger.info("Checking visibility", element="submit button")
    """
    return _logging_manager.get_logger(name)


def get_log_file_paths() -> List[Path]:
    """Get paths to all active log files."""
    return _logging_manager.get_log_file_paths()


def log_assertion(assertion_type: str, expected: Any, actual: Any, passed: bool) -> None:
    """
    Log assertion results with standardized format.

    Args:
        assertion_type: Type of assertion (has_class, is_displayed, etc.)
        expected: Expected value
        actual: Actual value
        passed: Whether assertion passed

    Example:
        >>> log_assertion("has_class", "visible", ["enabled", "visible"], True)
    """
    logger = get_logger("assertions")
    log_method = logger.debug if passed else logger.info

    log_method(
        f"Assertion {assertion_type}: {'PASSED' if passed else 'FAILED'}",
        assertion_type=assertion_type,
        expected=expected,
        actual=actual,
        passed=passed,
        event_type="assertion"
    )
