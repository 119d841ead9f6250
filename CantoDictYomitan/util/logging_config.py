"""
CantoDictYomitan Logging Configuration

A centralized logging system using loguru. Every pipeline stage logs through the
same logger; records are tagged with the stage that emitted them so console and
file output stay readable for long runs over the full CantoDict export.
"""

import inspect
import os
import sys
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger as _logger

# Remove default handler
_logger.remove()


class LoggerManager:
    """
    Manages the loguru handlers for the dictionary builder.
    Writes a console stream, a rotating debug log and a dedicated error log.
    """

    # Component to file patterns mapping for automatic context tagging
    COMPONENT_PATTERNS = {
        "READER": ["table_reader.py"],
        "DECODER": ["field_decoder.py"],
        "INDEX": ["entry_index.py"],
        "CONTENT": ["content_builder.py", "structured_content.py"],
        "BANK": ["dict_builder.py"],
        "CONFIG": ["configuration.py"],
        "CLI": ["__main__.py"],
    }

    APP_NAME = "CantoDictYomitan"

    def __init__(self):
        self._initialized = False
        self._log_dir: Optional[Path] = None
        self._handlers = {}

    def _get_app_directory(self) -> Path:
        """Get the application config directory (platform-aware)."""
        if sys.platform == 'win32':
            appdata_dir = os.getenv('APPDATA')
        else:
            appdata_dir = os.path.expanduser('~/.config')

        config_dir = Path(appdata_dir) / self.APP_NAME
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def _get_log_directory(self) -> Path:
        """Get or create the logs directory."""
        if self._log_dir is None:
            self._log_dir = self._get_app_directory() / 'logs'
            self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _detect_component_tag(self, record) -> str:
        """
        Detect the component tag based on the file path in the log record.
        Returns fixed-width component tag for consistent formatting.
        """
        file_path = record.get("file", {})
        file_name = getattr(file_path, "path", None) or str(file_path)
        file_name = file_name.replace("\\", "/")

        for component, patterns in self.COMPONENT_PATTERNS.items():
            for pattern in patterns:
                if pattern in file_name:
                    return component.ljust(8)

        return "MAIN".ljust(8)

    def _add_console_handler(self, logger_name: str, level: str = "INFO"):
        """Add a console handler with appropriate formatting and color."""
        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            return True

        handler_id = _logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <dim>{extra[component_tag]}</dim> | <level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=False,
            diagnose=False,
            filter=format_with_component,
        )
        self._handlers[f"{logger_name}_console"] = handler_id
        return handler_id

    def _add_file_handler(self, logger_name: str, level: str = "DEBUG"):
        """Add a rotating file handler for the specified logger."""
        log_file = self._get_log_directory() / f"{logger_name}.log"

        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            # Skip DISPLAY level from file logs
            return record["level"].name != "DISPLAY"

        handler_id = _logger.add(
            str(log_file),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component_tag]}{name}:{function}:{line} | {message}",
            level=level,
            rotation="5 MB",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
            filter=format_with_component,
        )
        self._handlers[f"{logger_name}_file"] = handler_id
        return handler_id

    def _add_error_handler(self):
        """Add a dedicated error log file for ERROR and CRITICAL messages."""
        error_log = self._get_log_directory() / "error.log"

        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            return record["level"].no >= 40

        handler_id = _logger.add(
            str(error_log),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component_tag]}{name}:{function}:{line} - {message}\n{exception}",
            level="ERROR",
            rotation="5 MB",
            retention="14 days",
            compression="zip",
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
            filter=format_with_component,
        )
        self._handlers["error_file"] = handler_id
        return handler_id

    def initialize(self, logger_name: Optional[str] = None, console_level: str = "INFO", file_level: str = "DEBUG"):
        """
        Initialize the logging system with handlers.

        Args:
            logger_name: Name of the log file stem (defaults to "cantodict")
            console_level: Minimum level for console output (INFO, DEBUG, etc.)
            file_level: Minimum level for file output
        """
        if self._initialized:
            return

        logger_name = logger_name or "cantodict"

        self._add_console_handler(logger_name, level=console_level)
        self._add_file_handler(logger_name, level=file_level)
        self._add_error_handler()

        _logger.configure(extra={"logger_name": logger_name})

        self._initialized = True
        _logger.debug(f"Logging initialized for {logger_name}, log directory: {self._get_log_directory()}")

    def get_logger(self) -> "Logger":
        """Get the configured loguru logger instance."""
        if not self._initialized:
            self.initialize()
        return _logger

    def add_custom_level(self, name: str, severity: int, color: str = ""):
        """
        Add a custom log level.

        Args:
            name: Level name (e.g., "DISPLAY")
            severity: Severity number (10=DEBUG, 20=INFO, 30=WARNING, 40=ERROR, 50=CRITICAL)
            color: Color tag for the level (e.g., "<blue>")
        """
        _logger.level(name, no=severity, color=color)

    def set_level(self, level: str):
        """Re-create every handler at a new level."""
        for handler_id in self._handlers.values():
            _logger.remove(handler_id)
        self._handlers.clear()
        self._initialized = False
        self.initialize(console_level=level, file_level=level)


# Global logger manager instance
_manager = LoggerManager()


def get_logger(name: Optional[str] = None) -> "Logger":
    """
    Get the configured logger instance.

    Args:
        name: Optional log file stem

    Returns:
        Configured loguru logger
    """
    if not _manager._initialized:
        _manager.initialize(logger_name=name)
    return _manager.get_logger()


def initialize_logging(logger_name: Optional[str] = None, console_level: str = "INFO", file_level: str = "DEBUG"):
    """Initialize the logging system (convenience function)."""
    _manager.initialize(logger_name=logger_name, console_level=console_level, file_level=file_level)


def set_level(level: str):
    """Change the level of every handler (convenience function)."""
    _manager.set_level(level)


# Export the logger directly for convenience
logger = get_logger()

# DISPLAY sits between INFO and WARNING; used for user-facing output that should not be logged to file
_manager.add_custom_level("DISPLAY", 25, "")


def display(message: str):
    """Display a message at DISPLAY level (custom level for user-facing messages)."""
    frame = inspect.currentframe().f_back
    logger.patch(lambda record: record.update(
        line=frame.f_lineno,
        function=frame.f_code.co_name
    )).log("DISPLAY", message)


__all__ = [
    'logger',
    'get_logger',
    'initialize_logging',
    'set_level',
    'display',
    'LoggerManager',
]
