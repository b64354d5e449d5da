import logging

import pytest

from dayflow.core.logger import LoggerManager, parse_level, parse_size, setup_logging


@pytest.mark.parametrize(
    "value,expected",
    [("512KB", 512 * 1024), ("10MB", 10 * 1024**2), ("1gb", 1024**3), (2048, 2048), ("100", 100)],
)
def test_parse_size(value, expected):
    assert parse_size(value) == expected


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(logging.ERROR) == logging.ERROR
    assert parse_level("nonsense") == logging.INFO


def test_library_loggers_quieted_by_default():
    setup_logging()
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_module_levels_override_defaults():
    LoggerManager._apply_module_levels({"httpx": "ERROR", "dayflow.services": "debug"})
    try:
        assert logging.getLogger("httpx").level == logging.ERROR
        assert logging.getLogger("dayflow.services").level == logging.DEBUG
    finally:
        logging.getLogger("dayflow.services").setLevel(logging.NOTSET)
        LoggerManager._apply_module_levels(None)


def test_level_override_forces_root_level():
    setup_logging(level="DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        setup_logging()
