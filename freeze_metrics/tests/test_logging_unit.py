"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import json
import logging

from freeze_metrics import configure_logging
from freeze_metrics.base.dto import MetricsSettings
from freeze_metrics.base.logging import LogContext, configure_logger, get_logger, log_event
from freeze_metrics.base.log_support import JsonFormatter


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("METRICS_LOG_LEVEL", "ERROR")
    logger = get_logger(name="metrics.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["logger"] == "metrics.test"


def test_log_event_hoists_payload_and_drops_none(capsys):
    logger = get_logger(name="metrics.test2", json_mode=True)
    log_event(logger, "metrics.session.finish", LogContext(run_id="r1"), methods=2, error=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "metrics.session.finish"
    assert data["run_id"] == "r1"
    assert data["methods"] == 2
    assert "error" not in data


def test_log_event_respects_level(capsys):
    logger = get_logger(name="metrics.test3", json_mode=True)
    log_event(logger, "quiet", level=logging.DEBUG)
    assert capsys.readouterr().err == ""


def test_json_formatter_includes_extra_attributes():
    record = logging.LogRecord("metrics.x", logging.INFO, __file__, 1, "plain text", None, None)
    record.method = "get_logs"
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "plain text"
    assert data["method"] == "get_logs"


def test_log_context_prunes_none_and_merges_extra():
    ctx = LogContext(run_id="abc", method=None, extra={"chunk": 7, "skip": None})
    assert ctx.to_dict() == {"run_id": "abc", "chunk": 7}


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "metrics.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("metrics.file"), "metrics.file.test", value=1)
        for h in logger.handlers:
            h.flush()
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "metrics.file.test"
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def test_configure_logging_applies_settings(capsys):
    logger = configure_logging(MetricsSettings(log_level="WARNING", json_logs=False))
    try:
        assert logger.level == logging.WARNING
        logger.warning("plain line")
        err = capsys.readouterr().err
        assert "WARNING metrics plain line" in err
    finally:
        configure_logger(level="INFO", json_mode=True)


def test_json_formatter_hoists_json_message_keys():
    payload = json.dumps({"event": "metrics.session.start", "run_id": "r9"})
    record = logging.LogRecord("metrics.x", logging.INFO, __file__, 1, payload, None, None)
    data = json.loads(JsonFormatter().format(record))
    assert data["event"] == "metrics.session.start"
    assert data["run_id"] == "r9"
    assert data["level"] == "INFO" and data["logger"] == "metrics.x"
    assert data["msg"] == payload


def test_json_formatter_keeps_non_object_json_as_message():
    record = logging.LogRecord("metrics.x", logging.INFO, __file__, 1, "[1, 2]", None, None)
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "[1, 2]"
    assert "event" not in data
