"""
Tests for the Qt-side pieces: DispatchWorker signals and QSettings profiles.

Workers are run synchronously (``run()`` instead of ``start()``) so no
event loop or display is needed.
"""
from __future__ import annotations

import os

import pytest

# Qt offscreen so these tests work in headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore

from receipt_dispatch.printing.profiles import (
    DEFAULT_CONFIG,
    SETTINGS_KEY,
    DispatchProfile,
    load_profiles,
    save_profiles,
)
from receipt_dispatch.printing.worker import DispatchWorker


@pytest.fixture(scope="module")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app


@pytest.fixture()
def settings(tmp_path):
    return QtCore.QSettings(str(tmp_path / "dispatch.ini"), QtCore.QSettings.IniFormat)


def _collect(worker: DispatchWorker) -> dict:
    seen = {"succeeded": [], "error": [], "finished": 0}
    worker.signals.succeeded.connect(seen["succeeded"].append)
    worker.signals.error.connect(seen["error"].append)

    def _done():
        seen["finished"] += 1

    worker.signals.finished.connect(_done)
    return seen


class TestDispatchWorker:
    def test_dry_run_success(self, qapp):
        worker = DispatchWorker('{"title":"x"}', {"strategy": "dry_run"})
        seen = _collect(worker)
        worker.run()
        assert worker.result.ok
        assert seen == {"succeeded": [""], "error": [], "finished": 1}

    def test_script_output_is_relayed(self, qapp, stub_script, python_exe):
        script = stub_script("import sys; sys.stdout.write('job 42 queued')")
        worker = DispatchWorker(
            "{}", {"strategy": "script", "interpreter": python_exe, "script_path": script}
        )
        seen = _collect(worker)
        worker.run()
        assert seen["succeeded"] == ["job 42 queued"]
        assert seen["finished"] == 1

    def test_spawn_failure_emits_error(self, qapp):
        worker = DispatchWorker(
            "{}", {"strategy": "script", "interpreter": "no-such-interpreter-xyz"}
        )
        seen = _collect(worker)
        worker.run()
        assert not worker.result.ok
        assert seen["error"][0].startswith("Failed to execute command:")
        assert seen["finished"] == 1

    def test_config_error_emits_error(self, qapp):
        worker = DispatchWorker("{}", {"strategy": "smoke_signals"})
        seen = _collect(worker)
        worker.run()
        assert "Unknown strategy" in seen["error"][0]
        assert seen["finished"] == 1


class TestProfiles:
    def test_first_run_gives_default(self, qapp, settings):
        profiles = load_profiles(settings)
        assert len(profiles) == 1
        assert profiles[0].name == "Default"
        assert profiles[0].config == DEFAULT_CONFIG

    def test_save_and_load(self, qapp, settings):
        save_profiles(
            [
                DispatchProfile("Counter", {"strategy": "shell"}),
                DispatchProfile("Kitchen", {"strategy": "script", "script_path": "k.py"}),
            ],
            settings,
        )
        profiles = load_profiles(settings)
        assert [p.name for p in profiles] == ["Counter", "Kitchen"]
        assert profiles[1].config["script_path"] == "k.py"
        # missing keys are filled from defaults
        assert profiles[1].config["timeout"] == DEFAULT_CONFIG["timeout"]

    def test_corrupt_json_falls_back(self, qapp, settings):
        settings.setValue(SETTINGS_KEY, "{not json")
        profiles = load_profiles(settings)
        assert [p.name for p in profiles] == ["Default"]

    def test_from_dict_tolerates_missing_fields(self):
        p = DispatchProfile.from_dict({})
        assert p.name == "Unnamed"
        assert p.config["strategy"] == "shell"
