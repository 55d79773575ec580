"""日志配置测试"""
import json
import logging
import sys

import pytest

from utils.logging import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:

    def test_level(self):
        setup_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("NOPE")
        assert logging.getLogger().level == logging.INFO

    def test_single_handler(self):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_json_format(self):
        setup_logging("INFO", "json")
        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)


class TestJsonFormatter:

    def test_fields(self):
        record = logging.LogRecord("cli", logging.WARNING, __file__, 1, "loan %s", ("L1",), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["level"] == "WARNING"
        assert data["logger"] == "cli"
        assert data["message"] == "loan L1"
        assert "exception" not in data

    def test_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("cli", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad" in data["exception"]
