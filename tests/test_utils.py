import logging
import os

import pytest

from sirinfer.utils import CustomLogFormatter, log_decorator, use_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("sirinfer")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_use_logging_levels():
    assert use_logging("debug").level == logging.DEBUG
    assert use_logging("warn").level == logging.WARNING
    assert use_logging("none").level > logging.CRITICAL
    # unknown levels fall back to info
    assert use_logging("loud").level == logging.INFO


def test_use_logging_does_not_duplicate_handlers():
    use_logging("info")
    logger = use_logging("info")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, CustomLogFormatter)


def test_use_logging_to_file(tmp_path):
    logger = use_logging("info", output="both", log_path=str(tmp_path))
    assert len(logger.handlers) == 2
    logger.info("written to file")
    for handler in logger.handlers:
        handler.flush()
    (logfile,) = os.listdir(tmp_path)
    with open(tmp_path / logfile) as f:
        assert "written to file" in f.read()


def test_log_decorator(caplog):
    @log_decorator
    def add(a, b=1):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="sirinfer"):
        assert add(1, b=2) == 3
    assert "Execution Time" in caplog.text
    assert "Arguments: 1, b=2" in caplog.text
    # wrapped function name is reported instead of the wrapper's
    assert all(record.func_name_override == "add" for record in caplog.records)


def test_log_decorator_reraises(caplog):
    @log_decorator()
    def fail():
        raise ValueError("bad draw")

    with caplog.at_level(logging.DEBUG, logger="sirinfer"):
        with pytest.raises(ValueError):
            fail()
    assert "Exception: bad draw" in caplog.text
