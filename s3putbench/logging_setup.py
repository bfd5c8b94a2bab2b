"""Centralized Logging Setup for the benchmark.

Usage::

    from s3putbench.logging_setup import setup_logging, get_logger

    setup_logging(level="DEBUG")
    logger = get_logger(node="node-1", op_type="PUT")
    logger.info("Run started")
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any

from s3putbench.config import DEFAULT_LOG_LEVEL

LOGGER_NAME = "s3putbench"


class BenchFormatter(logging.Formatter):
    """Custom formatter with structured fields for benchmark logging."""

    COLORS: dict[str, str] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def __init__(self, *, use_color: bool = True) -> None:
        self.use_color = use_color and sys.stderr.isatty()
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with run context."""
        node = getattr(record, "node", None)
        op_type = getattr(record, "op_type", "")
        key = getattr(record, "key", "")

        timestamp = datetime.fromtimestamp(
            record.created,
        ).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        level = record.levelname
        if self.use_color and level in self.COLORS:
            level_str = (
                f"{self.COLORS[level]}"
                f"{level:8s}"
                f"{self.COLORS['RESET']}"
            )
        else:
            level_str = f"{level:8s}"

        context = f"[{node}]" if node else ""
        op_tag = f"[{op_type}] " if op_type else ""
        key_tag = f"{key}: " if key else ""
        message = record.getMessage()

        return (
            f"{timestamp} {level_str} "
            f"{context:12s} {op_tag}{key_tag}{message}"
        )


class JsonFormatter(logging.Formatter):
    """JSON formatter for machine parsing."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data: dict[str, Any] = {
            "ts": datetime.fromtimestamp(
                record.created,
            ).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "node": getattr(record, "node", None),
            "op": getattr(record, "op_type", None),
            "key": getattr(record, "key", None),
        }
        log_data = {
            k: v for k, v in log_data.items() if v is not None
        }
        return json.dumps(log_data)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that adds run context to all messages."""

    def process(
        self,
        msg: str,
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        """Add context fields to the log record."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    *,
    level: str | None = None,
    log_file: str | None = None,
) -> logging.Logger:
    """Configure centralized logging for the benchmark.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file path to write logs to.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = os.environ.get(
            "S3PUTBENCH_LOG_LEVEL", DEFAULT_LOG_LEVEL,
        )
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    use_json = (
        os.environ.get("S3PUTBENCH_LOG_JSON", "0") == "1"
    )

    if use_json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = BenchFormatter(use_color=True)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = os.environ.get("S3PUTBENCH_LOG_FILE")

    if log_file:
        file_handler = logging.FileHandler(log_file)
        if use_json:
            file_handler.setFormatter(formatter)
        else:
            file_handler.setFormatter(
                BenchFormatter(use_color=False),
            )
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(
    *,
    node: str | None = None,
    op_type: str | None = None,
) -> ContextLogger:
    """Get a logger with optional run context.

    Args:
        node: Node identifier of this harness instance.
        op_type: Operation tag (e.g. ``PUT``).

    Returns:
        ContextLogger with run context attached.
    """
    base_logger = logging.getLogger(LOGGER_NAME)

    if not base_logger.handlers:
        setup_logging()

    extra: dict[str, Any] = {}
    if node is not None:
        extra["node"] = node
    if op_type is not None:
        extra["op_type"] = op_type

    return ContextLogger(base_logger, extra)
