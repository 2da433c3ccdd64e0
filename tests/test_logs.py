import logging

import pytest

from utils.logs import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_file_handler_receives_records(tmp_path):
    log_file = tmp_path / "system.log"
    root = setup_logging(enable_logging=True, log_file=str(log_file), level="debug")

    logging.getLogger("server.service").info("Injected %d demo devices", 5)
    for handler in root.handlers:
        handler.flush()

    assert root.level == logging.DEBUG
    assert "Injected 5 demo devices" in log_file.read_text(encoding="utf-8")


def test_disabled_logging_keeps_only_errors(tmp_path):
    log_file = tmp_path / "system.log"
    root = setup_logging(enable_logging=False, log_file=str(log_file))

    assert root.level == logging.ERROR
    assert len(root.handlers) == 1
    assert not log_file.exists()
