"""
Тесты логирования: форматтеры, StructuredLogger, setup.
"""

import io
import json
import logging

import pytest

from hardware_collector.core.context import RunContext, set_current_context
from hardware_collector.core.logging import (
    HumanFormatter,
    JSONFormatter,
    LogConfig,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(message="hello", **extra):
    record = logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_formatter(self):
        line = JSONFormatter().format(_record(device="eksa-dev01", records=3))
        data = json.loads(line)
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["device"] == "eksa-dev01"
        assert data["records"] == 3

    def test_human_formatter(self):
        line = HumanFormatter().format(_record(run_id="run-1", device="h", operation="devices"))
        assert "[run-1] hello" in line
        assert "(device=h, operation=devices)" in line

    def test_human_formatter_plain(self):
        line = HumanFormatter().format(_record())
        assert line.endswith("hello")


class TestLogConfig:

    def test_from_dict_level_name(self):
        config = LogConfig.from_dict({"level": "debug", "json_format": True})
        assert config.level == logging.DEBUG
        assert config.json_format is True

    def test_from_dict_defaults(self):
        config = LogConfig.from_dict({})
        assert config.level == logging.INFO
        assert config.file_path is None


class TestStructuredLogger:

    def test_run_id_from_context(self, restore_root_logger):
        ctx = RunContext.create(triggered_by="test")
        set_current_context(ctx)
        stream = io.StringIO()
        setup_logging(json_format=True, level=logging.DEBUG, stream=stream)

        get_logger("hardware_collector.test").bind(operation="devices").info("ok", records=2)

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        data = json.loads(lines[0])
        assert data["run_id"] == ctx.run_id
        assert data["operation"] == "devices"
        assert data["records"] == 2

    def test_get_logger_cached(self):
        assert get_logger("a.b") is get_logger("a.b")


class TestSetup:

    def test_file_handler(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "collector.log"
        config = LogConfig(level=logging.INFO, json_format=True, console=False, file_path=str(log_file))
        setup_logging_from_config(config)

        logging.getLogger("hardware_collector.test").info("в файл")
        for handler in logging.getLogger().handlers:
            handler.flush()

        data = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert data["message"] == "в файл"

    def test_level_applied(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging_from_config(LogConfig(level=logging.WARNING), stream=stream)
        logging.getLogger("hardware_collector.test").info("скрыто")
        assert stream.getvalue() == ""
