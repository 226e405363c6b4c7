"""
TunnelView Logging -- Setup Tests
"""

import logging

from tunnelview.config import settings
from tunnelview.logging_config import setup_logging


def test_defaults_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "WARNING")
    monkeypatch.setattr(settings, "LOG_FILE", "")
    logger = setup_logging()
    assert logger.name == "tunnelview"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_repeat_calls_do_not_stack_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.DEBUG)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_log_file(tmp_path):
    path = tmp_path / "tunnelview.log"
    logger = setup_logging(logging.INFO, str(path))
    logging.getLogger("tunnelview.kernel.location").info("hello file")
    for handler in logger.handlers:
        handler.flush()
    assert "hello file" in path.read_text(encoding="utf-8")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
