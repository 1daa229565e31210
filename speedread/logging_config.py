"""Structured logging configuration for the reading engine"""

import json
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "speedread.log"
ERROR_LOG_FILE_NAME = "errors.log"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Custom fields passed as extra={"extra_data": {...}}
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console formatter with colors"""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        log_msg = f"{color}[{record.levelname}]{reset} {record.name} - {record.getMessage()}"

        if hasattr(record, "extra_data") and "word_index" in record.extra_data:
            log_msg += f" (word {record.extra_data['word_index']})"

        if record.exc_info:
            log_msg += f"\n{self.formatException(record.exc_info)}"

        return log_msg


def setup_logging(
    log_level: str = "INFO",
    enable_file_logging: bool = False,
    enable_console_logging: bool = True,
    log_dir: str | Path = "./logs",
    debug: bool = False,
) -> None:
    """
    Setup logging configuration for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_file_logging: Enable JSON logging to rotating files
        enable_console_logging: Enable logging to console
        log_dir: Directory for the rotating log files
        debug: Also show per-tick scheduler records
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    root_logger.handlers.clear()

    if enable_console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        app_handler = RotatingFileHandler(
            log_path / LOG_FILE_NAME, maxBytes=MAX_LOG_BYTES, backupCount=5
        )
        app_handler.setLevel(logging.DEBUG)
        app_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(app_handler)

        error_handler = RotatingFileHandler(
            log_path / ERROR_LOG_FILE_NAME, maxBytes=MAX_LOG_BYTES, backupCount=5
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

    # Ticks fire several times a second; keep the scheduler quiet outside debug
    scheduler_logger = logging.getLogger("speedread.services.scheduler")
    if debug:
        scheduler_logger.setLevel(logging.NOTSET)
    else:
        scheduler_logger.setLevel(max(logging.INFO, root_logger.level))


def setup_logging_from_settings(settings=None) -> None:
    """Configure logging from application settings."""
    if settings is None:
        from speedread.config import get_settings

        settings = get_settings()

    setup_logging(
        log_level="DEBUG" if settings.debug else settings.log_level,
        enable_file_logging=settings.log_to_file,
        log_dir=settings.log_dir,
        debug=settings.debug,
    )
    logging.getLogger(__name__).debug("Logging configured for %s", settings.app_name)
