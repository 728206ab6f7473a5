"""Tests for logger setup."""

import logging
from utils.logger import setup_logger


def test_setup_logger_default():
    """Test logger setup with default settings."""
    logger = setup_logger()
    assert logger.name == "pr_review_dashboard"
    assert logger.level == logging.INFO


def test_setup_logger_custom_level():
    """Test logger setup with custom log level."""
    logger = setup_logger(log_level="DEBUG")
    assert logger.level == logging.DEBUG


def test_setup_logger_custom_name():
    """Test logger setup with custom name."""
    logger = setup_logger(name="test_logger")
    assert logger.name == "test_logger"


def test_unknown_level_falls_back_to_info():
    logger = setup_logger(log_level="chatty")
    assert logger.level == logging.INFO
