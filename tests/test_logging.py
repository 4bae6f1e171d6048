import json
import logging

import structlog

from DPRCalculator.config import Settings
from DPRCalculator.logging import setup_logging


def test_setup_logging_defaults_console_only():
    setup_logging(None)
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)


def test_setup_logging_writes_json_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "logs" / "dpr.jsonl"
    settings = Settings(
        logging_console="NONE",
        logging_file="INFO",
        logging_file_path=str(path),
    )
    setup_logging(settings)
    structlog.get_logger("test").info("calculator.test", total=19.815)
    for h in logging.getLogger().handlers:
        h.flush()
    lines = path.read_text().splitlines()
    assert lines
    rec = json.loads(lines[-1])
    assert rec["event"] == "calculator.test"
    assert rec["total"] == 19.815
    assert rec["level"] == "info"


def test_handler_level_filters(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "dpr.jsonl"
    settings = Settings(
        logging_level="DEBUG",
        logging_console="NONE",
        logging_file="WARNING",
        logging_file_path=str(path),
    )
    setup_logging(settings)
    logging.getLogger("x").info("quiet")
    logging.getLogger("x").warning("loud")
    for h in logging.getLogger().handlers:
        h.flush()
    text = path.read_text()
    assert "loud" in text
    assert "quiet" not in text


def test_all_handlers_disabled(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging(Settings(logging_console="NONE", logging_file="NONE"))
    assert logging.getLogger().handlers == []


def test_unknown_level_falls_back_to_overall(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging(Settings(logging_level="WARNING", logging_console="loud", logging_file="NONE"))
    (handler,) = logging.getLogger().handlers
    assert handler.level == logging.WARNING
