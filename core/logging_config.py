"""Structured logging configuration for XMLVault."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class JSONFormatter:
    """JSON formatter for structured logging."""

    def __call__(self, record: dict[str, Any]) -> str:
        """Serialise the record into ``extra`` and return the template loguru renders."""
        log_data = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record.get("module", ""),
            "function": record.get("function", ""),
            "line": record.get("line", 0),
        }

        exception = record.get("exception")
        if exception is not None:
            log_data["exception"] = {
                "type": exception.type.__name__ if exception.type else None,
                "value": str(exception.value) if exception.value else None,
            }

        extra = {k: v for k, v in record["extra"].items() if k != "serialized"}
        log_data.update(extra)

        record["extra"]["serialized"] = json.dumps(log_data, ensure_ascii=False, default=str)
        return "{extra[serialized]}\n"


class InterceptHandler(logging.Handler):
    """Forward standard-library records (uvicorn, botocore) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Whether to use JSON formatting (useful for production).
        log_file: Optional path to log file. If None, logs only to stderr.
    """
    # Remove default handler
    logger.remove()

    if json_format:
        formatter: Any = JSONFormatter()
    else:
        formatter = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        format=formatter,
        level=level,
        colorize=not json_format,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=formatter,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
