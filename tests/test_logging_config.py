import logging
import sys

import pytest
from rich.logging import RichHandler

from stampede.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level, hook = list(root.handlers), root.level, sys.excepthook
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    sys.excepthook = hook


def test_console_logging_goes_through_rich(restore_root_logger):
    root = setup_logging(level="debug")

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert root.handlers[0].console.stderr


def test_log_file_receives_plain_records(restore_root_logger, tmp_path):
    log_file = tmp_path / "stampede.log"
    setup_logging(log_file=str(log_file))

    logging.getLogger("stampede.test").error("backend unreachable")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "| ERROR    | stampede.test" in text
    assert "backend unreachable" in text
