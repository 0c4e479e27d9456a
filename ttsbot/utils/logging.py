import logging
import logging.handlers
import structlog
import sys
from pathlib import Path
from typing import Any, Dict
from datetime import datetime

from .audit_log import install_audit_handler


def setup_logging(log_level: str = "INFO", log_to_file: bool = True) -> None:
    """Set up logging for the bot.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
    """
    level = getattr(logging, log_level.upper())

    logs_dir = Path("logs")
    if log_to_file:
        logs_dir.mkdir(exist_ok=True)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()  # Clear any existing handlers
    root_logger.addHandler(console_handler)

    # discord.py logs every gateway event at DEBUG
    logging.getLogger("discord").setLevel(max(level, logging.INFO))

    if log_to_file:
        # General application log file
        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        app_handler.setLevel(logging.INFO)
        app_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
        app_handler.setFormatter(app_formatter)
        root_logger.addHandler(app_handler)

        # Playback log file (synthesis and voice output)
        playback_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "playback.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10,
            encoding="utf-8",
        )
        playback_handler.setLevel(logging.DEBUG)
        playback_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        playback_logger = logging.getLogger("playback")
        playback_logger.addHandler(playback_handler)
        playback_logger.propagate = True  # Also send to root logger

        # Error-only log file for critical issues
        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=10,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
        error_handler.setFormatter(error_formatter)
        root_logger.addHandler(error_handler)

        # Option changes, kept for 90 days
        install_audit_handler(logs_dir)


def get_playback_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger for synthesis and voice playback."""
    return structlog.get_logger(name or "playback")


class PlaybackLogContext:
    """Logs the start, outcome and duration of reading one message aloud.

    Exceptions are logged and then propagate.
    """

    def __init__(self, operation: str, **context):
        self.operation = operation
        self.context = context
        self.logger = get_playback_logger()
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"{self.operation} - START", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        details: Dict[str, Any] = {"elapsed_seconds": elapsed, **self.context}
        if exc_type is None:
            self.logger.info(f"{self.operation} - OK", **details)
        else:
            self.logger.error(
                f"{self.operation} - FAILED",
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                **details,
            )
        return False
