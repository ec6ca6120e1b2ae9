"""
Unit tests for the logging helpers
"""

import logging

from conductor.config import ProdConfig
from conductor.logging import DEFAULT_FORMAT, get_logger, setup_logging_from_config


def test_get_logger_configures_once():
    logger = get_logger("conductor.tests.sample", level="debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT

    again = get_logger("conductor.tests.sample", level="error")
    assert again is logger
    assert len(again.handlers) == 1
    assert again.level == logging.DEBUG


def test_setup_logging_from_config():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        setup_logging_from_config(ProdConfig)
        assert root.level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
