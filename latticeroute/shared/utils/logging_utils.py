"""Logging utilities for LatticeRoute."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict

from ..configuration.settings import LoggingSettings

PACKAGE_LOGGER = "latticeroute"


def qualify_component(component: str) -> str:
    """Expand a component name such as ``algorithms.manhattan`` to its logger name."""
    if component == PACKAGE_LOGGER or component.startswith(PACKAGE_LOGGER + "."):
        return component
    return f"{PACKAGE_LOGGER}.{component}"


def setup_logging(settings: LoggingSettings) -> logging.Logger:
    """Attach handlers to the ``latticeroute`` logger hierarchy.

    Only the package logger is configured, so an application embedding the
    library keeps its own root handlers. Calling this again replaces the
    handlers installed by the previous call.

    Args:
        settings: Logging settings configuration

    Returns:
        The package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, settings.level.upper())
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt=settings.format_string,
        datefmt=settings.date_format
    )

    if settings.console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

    if settings.file_output:
        try:
            log_path = Path(settings.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=settings.log_file,
                maxBytes=settings.max_file_size_mb * 1024 * 1024,
                backupCount=settings.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

        except OSError as e:
            package_logger.error(f"Failed to setup file logging: {e}")

    # Component names may omit the package prefix
    for component, component_level in settings.component_levels.items():
        component_logger = logging.getLogger(qualify_component(component))
        component_logger.setLevel(getattr(logging, component_level.upper()))

    package_logger.info("LatticeRoute logging initialized")
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class ContextLogger:
    """Logger that prefixes messages with ``[key=value ...]`` context.

    The lattice extent, the routed net and the search endpoints are the
    usual context; ``bind`` adds more once it is known.
    """

    def __init__(self, logger: logging.Logger, context: Dict[str, Any]):
        self.logger = logger
        self.context = dict(context)

    def bind(self, **context) -> 'ContextLogger':
        """Return a logger carrying this context plus ``context``."""
        return ContextLogger(self.logger, {**self.context, **context})

    def _format_message(self, message: str) -> str:
        if self.context:
            context_str = " ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{context_str}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self.logger.error(self._format_message(message), *args, **kwargs)


def get_context_logger(name: str, **context) -> ContextLogger:
    """Get a context logger with additional information.

    Args:
        name: Logger name
        **context: Context key-value pairs

    Returns:
        ContextLogger instance
    """
    return ContextLogger(get_logger(name), context)


def lattice_logger(name: str, columns: int, rows: int, **context) -> ContextLogger:
    """Context logger tagged with a lattice extent as ``lattice=<columns>x<rows>``."""
    return get_context_logger(name, lattice=f"{columns}x{rows}", **context)
