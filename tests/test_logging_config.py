"""Tests for logging setup and formatters."""

import json
import logging

import pytest

from course_planner.config import LoggingConfig
from course_planner.exceptions import ProbeFailedError
from course_planner.logging_config import (
    ROOT_LOGGER_NAME,
    JsonFormatter,
    get_logger,
    log_exception,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_child_loggers_share_the_namespace(self):
        assert get_logger('matcher').name == 'course_planner.matcher'

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(level="DEBUG")
        root = setup_logging(level="WARNING")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert root.propagate is False

    def test_json_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "planner.log"
        setup_logging(level="INFO", log_file=str(log_file), json_format=True, console=False)

        try:
            raise ProbeFailedError("broken.mp4", reason="moov atom not found", exit_code=1)
        except ProbeFailedError as error:
            log_exception(get_logger('probe'), error, "Probe failed")

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        record = json.loads(line)
        assert record['level'] == 'ERROR'
        assert record['logger'] == 'course_planner.probe'
        assert record['file_name'] == 'broken.mp4'
        assert record['exit_code'] == 1
        assert 'ProbeFailedError' in record['exception']

    def test_from_config_verbose_and_override(self, tmp_path):
        config = LoggingConfig(level="ERROR", file=None)
        log_file = tmp_path / "override.log"
        root = setup_logging_from_config(config, verbose=True, log_file=str(log_file))
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)


class TestJsonFormatter:
    def test_plain_record(self):
        record = logging.LogRecord(
            'course_planner.slides', logging.INFO, __file__, 10, "Found %d slides", (7,), None
        )
        data = json.loads(JsonFormatter().format(record))
        assert data['message'] == "Found 7 slides"
        assert 'exception' not in data
        assert 'file_name' not in data
