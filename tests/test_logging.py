"""Tests for logging setup and formatters."""

import json
import logging

from observability.logging import ColoredFormatter, JSONFormatter, setup_logging


def make_record(msg="Deploy finished", level=logging.INFO, **extra):
    record = logging.LogRecord("server.deploy", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    entry = json.loads(JSONFormatter("docs-test").format(make_record(sender="platform-api")))
    assert entry["message"] == "Deploy finished"
    assert entry["level"] == "INFO"
    assert entry["service"] == "docs-test"
    assert entry["sender"] == "platform-api"


def test_colored_formatter_without_colors():
    line = ColoredFormatter(use_colors=False).format(make_record(level=logging.WARNING))
    assert "| WARNING  | server.deploy | Deploy finished" in line
    assert "\033[" not in line


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "docs.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(level="DEBUG", log_file=str(log_file), use_colors=False)
        logging.getLogger("server.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "hello"
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
