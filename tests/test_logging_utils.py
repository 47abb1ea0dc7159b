"""Tests for logging helpers."""

import logging

from common.logging_utils import (
    Timer,
    configure_logging,
    extra_context,
    quote_args,
    safe_url,
)


class TestLoggingUtils:
    """Helpers used by every module."""

    def test_quote_args(self):
        assert quote_args(["cs", "", "Foo bar.scala", "-Xlint"]) == ["cs", "'Foo bar.scala'", "-Xlint"]

    def test_safe_url_strips_query_and_credentials(self):
        assert safe_url("https://user:pw@api.github.com:8443/repos/x?ref=heads/a") == \
            "https://api.github.com:8443/repos/x"

    def test_extra_context_drops_none(self):
        assert extra_context(event="e", outcome=None) == {"event": "e"}

    def test_configure_logging_from_environment(self, monkeypatch):
        root = logging.getLogger()
        before = root.level
        monkeypatch.setenv("SCALA_RUNNER_LOG_LEVEL", "info")
        try:
            configure_logging()
            configure_logging()
            assert root.level == logging.INFO
            assert len([h for h in root.handlers if h.get_name() == "scala-runner"]) == 1
        finally:
            root.setLevel(before)

    def test_timer(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0
