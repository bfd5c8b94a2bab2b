"""Tests for logging configuration and formatters."""

import json
import logging

import pytest

from s3putbench.logging_setup import (
    LOGGER_NAME,
    BenchFormatter,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_json_logs_go_to_stderr_and_file(monkeypatch, tmp_path, capsys):
    log_file = tmp_path / "bench.log"
    monkeypatch.setenv("S3PUTBENCH_LOG_JSON", "1")
    monkeypatch.setenv("S3PUTBENCH_LOG_FILE", str(log_file))

    base = setup_logging(level="DEBUG")
    assert base.level == logging.DEBUG
    assert len(base.handlers) == 2

    logger = get_logger(node="node-1", op_type="PUT")
    logger.info("uploaded", extra={"key": "object1"})
    for handler in base.handlers:
        handler.flush()

    file_record = json.loads(log_file.read_text().strip())
    assert file_record["level"] == "INFO"
    assert file_record["msg"] == "uploaded"
    assert file_record["node"] == "node-1"
    assert file_record["op"] == "PUT"
    assert file_record["key"] == "object1"
    assert "ts" in file_record

    stderr_record = json.loads(capsys.readouterr().err.strip())
    assert stderr_record == file_record


def test_json_omits_missing_context(monkeypatch, tmp_path):
    log_file = tmp_path / "bench.log"
    monkeypatch.setenv("S3PUTBENCH_LOG_JSON", "1")
    monkeypatch.setenv("S3PUTBENCH_LOG_FILE", str(log_file))
    setup_logging(level="INFO")

    get_logger().warning("no context")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    record = json.loads(log_file.read_text().strip())
    assert set(record) == {"ts", "level", "msg"}


def test_plain_file_log_has_no_color(monkeypatch, tmp_path):
    log_file = tmp_path / "bench.log"
    monkeypatch.delenv("S3PUTBENCH_LOG_JSON", raising=False)
    monkeypatch.setenv("S3PUTBENCH_LOG_FILE", str(log_file))
    setup_logging(level="INFO")

    get_logger(node="node-2", op_type="PUT").error("aborted")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    line = log_file.read_text().strip()
    assert "\033[" not in line
    assert "ERROR" in line
    assert "[node-2]" in line
    assert "[PUT] aborted" in line


def test_debug_messages_filtered_at_info(monkeypatch, tmp_path):
    log_file = tmp_path / "bench.log"
    monkeypatch.delenv("S3PUTBENCH_LOG_JSON", raising=False)
    monkeypatch.setenv("S3PUTBENCH_LOG_FILE", str(log_file))
    setup_logging(level="INFO")

    logger = get_logger()
    logger.debug("hidden")
    logger.info("shown")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    text = log_file.read_text()
    assert "hidden" not in text
    assert "shown" in text


def test_formatter_renders_object_key():
    record = logging.makeLogRecord({
        "msg": "uploaded 16 bytes",
        "levelname": "DEBUG",
        "node": "node-3",
        "op_type": "PUT",
        "key": "node-3-object1",
    })
    text = BenchFormatter(use_color=False).format(record)
    assert text.endswith("[PUT] node-3-object1: uploaded 16 bytes")
    assert "DEBUG" in text
