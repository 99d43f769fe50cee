from __future__ import annotations

import logging

import pytest

from odocindex.logger import TRACE, AppLogger, level_from_env, logger, set_verbosity


def test_level_from_env_prefers_project_variable(monkeypatch):
    monkeypatch.setenv("ODOCINDEX_LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert level_from_env() == logging.WARNING


def test_level_from_env_trace_and_fallback(monkeypatch):
    monkeypatch.delenv("ODOCINDEX_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "TRACE")
    assert level_from_env() == TRACE
    monkeypatch.setenv("LOG_LEVEL", "loud")
    assert level_from_env() == logging.INFO


def test_set_verbosity_only_lowers_level():
    previous = logger.level
    try:
        logger.setLevel(logging.INFO)
        set_verbosity(0)
        assert logger.level == logging.INFO
        set_verbosity(1)
        assert logger.level == logging.DEBUG
        set_verbosity(2)
        assert logger.level == TRACE
    finally:
        logger.setLevel(previous)


def test_error_raise_uses_given_exception_class():
    assert isinstance(logger, AppLogger)
    with pytest.raises(KeyError):
        logger.error_raise("missing row", exc=KeyError)
    with pytest.raises(RuntimeError, match="boom"):
        logger.error_raise("boom")
