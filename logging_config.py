"""
Logging configuration for artifact configuration tooling.
Provides JSON-formatted logging to stderr with configurable log levels.
"""
import json
import logging
import os
import sys
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

LOG_LEVEL_ENV_VAR = "ARTIFACT_CONFIG_LOG_LEVEL"


@dataclass
class LogPayload:
    """Structured log payload for consistent logging."""
    component: Optional[str] = None
    step: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    duration_ms: Optional[float] = None
    exception: Optional[str] = None


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def __init__(self, execution_id: str = None):
        super().__init__()
        self.execution_id = execution_id or str(uuid.uuid4())[:8]

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "execution_id": self.execution_id
        }

        for attribute in ("component", "step", "data", "duration_ms", "exception"):
            if hasattr(record, attribute):
                log_entry[attribute] = getattr(record, attribute)

        if record.exc_info:
            log_entry["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
                "message": str(record.exc_info[1]) if record.exc_info[1] else "",
                "traceback": self.formatException(record.exc_info)
            }

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ConfigLogger:
    """Singleton factory class for creating configured loggers."""
    _instance = None
    _initialized = False

    def __new__(cls, execution_id: str = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, execution_id: str = None):
        if not self._initialized:
            self.execution_id = execution_id or str(uuid.uuid4())[:8]
            self._configured = False
            ConfigLogger._initialized = True

    def configure_logging(self, log_level: str = "INFO") -> None:
        """Configure the root logger with JSON formatting to stderr."""
        if self._configured:
            return

        numeric_level = getattr(logging, log_level.upper(), logging.INFO)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(JSONFormatter(execution_id=self.execution_id))
        stderr_handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)

        # Remove any existing handlers to avoid duplicates
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        root_logger.addHandler(stderr_handler)

        self._configured = True

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger with the specified name."""
        return logging.getLogger(name)

    def log_with_context(self, logger: logging.Logger, level: Union[int, str], message: str,
                         payload: LogPayload = None, **kwargs) -> None:
        """Log a message with additional context using structured payload."""
        if isinstance(level, str):
            numeric_level = getattr(logging, level.upper(), logging.INFO)
        else:
            numeric_level = level

        if not logger.isEnabledFor(numeric_level):
            return

        if payload is None:
            payload = LogPayload(
                component=kwargs.get('component'),
                step=kwargs.get('step'),
                data=kwargs.get('data'),
                duration_ms=kwargs.get('duration_ms'),
                exception=kwargs.get('exception'),
            )

        record = logger.makeRecord(
            logger.name, numeric_level, "", 0, message, (), kwargs.get('exc_info')
        )

        if payload.component:
            record.component = payload.component
        if payload.step:
            record.step = payload.step
        if payload.data:
            record.data = payload.data
        if payload.duration_ms is not None:
            record.duration_ms = payload.duration_ms
        if payload.exception:
            record.exception = payload.exception

        logger.handle(record)


def get_log_level_from_env_and_args(args_log_level: str = None, verbose: bool = False) -> str:
    """
    Determine log level from environment variable, CLI args, and defaults.

    Priority:
    1. CLI --verbose flag (sets DEBUG)
    2. CLI --log-level argument
    3. ARTIFACT_CONFIG_LOG_LEVEL environment variable
    4. Default (INFO)
    """
    if verbose:
        return "DEBUG"

    if args_log_level:
        return args_log_level.upper()

    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_level:
        return env_level.upper()

    return "INFO"


def setup_logging(log_level: str = None, verbose: bool = False,
                  execution_id: str = None) -> ConfigLogger:
    """
    Set up logging for configuration tooling.

    Args:
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR)
        verbose: If True, sets log level to DEBUG
        execution_id: Optional execution ID for tracking

    Returns:
        Configured ConfigLogger instance
    """
    final_log_level = get_log_level_from_env_and_args(log_level, verbose)

    config_logger = ConfigLogger(execution_id)
    config_logger.configure_logging(final_log_level)

    return config_logger


# Global singleton instance
_config_logger = ConfigLogger()


def log_step_start(logger: logging.Logger, component: str, step: str, message: str,
                   data: Dict[str, Any] = None) -> None:
    """Log the start of a step."""
    _config_logger.log_with_context(
        logger, logging.INFO, message,
        component=component, step=step, data=data
    )


def log_step_complete(logger: logging.Logger, component: str, step: str, message: str,
                      data: Dict[str, Any] = None, duration_ms: float = None) -> None:
    """Log the completion of a step."""
    _config_logger.log_with_context(
        logger, logging.INFO, message,
        component=component, step=step, data=data, duration_ms=duration_ms
    )


def log_debug(logger: logging.Logger, message: str, component: str = None,
              data: Dict[str, Any] = None) -> None:
    """Log a debug message with optional context."""
    _config_logger.log_with_context(
        logger, logging.DEBUG, message,
        component=component, data=data
    )


def log_warning(logger: logging.Logger, message: str, component: str = None,
                data: Dict[str, Any] = None) -> None:
    """Log a warning with optional context."""
    _config_logger.log_with_context(
        logger, logging.WARNING, message,
        component=component, data=data
    )


def log_error(logger: logging.Logger, message: str, component: str = None,
              error: Exception = None) -> None:
    """Log an error message with optional exception info."""
    exc_info = (type(error), error, error.__traceback__) if error else None
    _config_logger.log_with_context(
        logger, logging.ERROR, message,
        component=component,
        exception=str(error) if error else None,
        exc_info=exc_info
    )
