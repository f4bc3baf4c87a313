"""Tests for centralized logging helpers."""

import logging

from common.logging_utils import (
    Timer,
    add_file_handler,
    configure_logging,
    extra_context,
    is_debug_enabled,
    safe_url,
)
from constants import Constants


def test_configure_logging_from_env(monkeypatch):
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "debug")
    try:
        configure_logging()
        assert root.level == logging.DEBUG
        assert is_debug_enabled(logging.getLogger("compatgate.test"))
        configure_logging("bogus")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)


def test_extra_context_drops_none():
    ctx = extra_context(event="x", component="cli", outcome=None)
    assert ctx == {"event": "x", "component": "cli"}


def test_safe_url_strips_credentials_and_query():
    assert safe_url("https://user:pw@example.com:8443/a/b.json?token=abc") == "https://example.com:8443/a/b.json"


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0


def test_file_handler_writes(tmp_path):
    path = tmp_path / "run.log"
    handler = add_file_handler(str(path))
    log = logging.getLogger("compatgate.filetest")
    log.setLevel(logging.INFO)
    try:
        log.info("hello file")
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()
    assert "hello file" in path.read_text(encoding="utf-8")
