"""Tests for the logging setup."""
import logging

from utils.logger import _resolve_level, get_logger


def test_level_names_resolve():
    assert _resolve_level("DEBUG") == logging.DEBUG
    assert _resolve_level("WARNING") == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert _resolve_level("LOUD") == logging.INFO


def test_get_logger_attaches_one_root_handler():
    get_logger("a")
    handlers = list(logging.getLogger().handlers)
    get_logger("b")

    assert logging.getLogger().handlers == handlers
