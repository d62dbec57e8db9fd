"""
Tests for application bootstrap helpers and dialog value formatting.

Nothing here constructs a QApplication or a widget.
"""
from __future__ import annotations

import logging
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from receipt_dispatch import app
from receipt_dispatch.ui.dialogs import shell_args_text


class TestDebugSwitch:
    def test_flag_enables_debug(self, monkeypatch):
        monkeypatch.delenv(app.DEBUG_ENV, raising=False)
        assert app.debug_enabled(["prog", "--debug"])

    def test_env_enables_debug(self, monkeypatch):
        monkeypatch.setenv(app.DEBUG_ENV, "1")
        assert app.debug_enabled(["prog"])

    def test_off_by_default(self, monkeypatch):
        monkeypatch.delenv(app.DEBUG_ENV, raising=False)
        assert not app.debug_enabled(["prog"])


class TestConfigureLogging:
    @pytest.fixture()
    def captured(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        return calls

    def test_debug_logs_info(self, captured):
        app.configure_logging(True)
        assert captured[0]["level"] == logging.INFO

    def test_default_logs_warnings(self, captured):
        app.configure_logging(False)
        assert captured[0]["level"] == logging.WARNING
        assert "%(name)s" in captured[0]["format"]


class TestShellArgsText:
    def test_list(self):
        assert shell_args_text({"shell_args": ["-l", "-i"]}) == "-l -i"

    def test_string_is_not_split_into_characters(self):
        assert shell_args_text({"shell_args": "-l -i"}) == "-l -i"

    def test_missing_uses_defaults(self):
        assert shell_args_text({}) == "-l -i"

    def test_empty_list(self):
        assert shell_args_text({"shell_args": []}) == ""
