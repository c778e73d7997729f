"""
Tests for the structured logger.
"""

import json
import logging

from setup_bosun.setup_bosun_logger import SetupBosunLogger


def test_log_line_records_caller(caplog):
    caplog.set_level(logging.INFO, logger="setup_bosun")
    logger = SetupBosunLogger()

    logger.log("Downloading bosun version v1.2.3", logging.INFO)

    record = caplog.records[-1]
    line = json.loads(record.getMessage())
    assert record.levelno == logging.INFO
    assert line["level"] == "INFO"
    assert line["message"] == "Downloading bosun version v1.2.3"
    assert line["caller_file"] == "test_setup_bosun_logger.py"
    assert line["caller_name"] == "test_log_line_records_caller"


def test_log_line_is_single_line(caplog):
    caplog.set_level(logging.INFO, logger="setup_bosun")
    SetupBosunLogger().log("first line\nsecond 'line'", logging.ERROR)

    line = json.loads(caplog.records[-1].getMessage())
    assert line["message"] == 'first line second "line"'


def test_debug_suppressed_at_default_level(caplog):
    SetupBosunLogger().log("hidden", logging.DEBUG)
    assert not any("hidden" in record.getMessage() for record in caplog.records)
