import logging

import pytest

import shuttlemap.app  # important to preserve the namespace for monkeypatching
from shuttlemap.app import main
from shuttlemap.x11 import DisplayError


def test_unknown_debug_category_exits_1():
    assert main(["shuttlemap", "-dq", "/dev/input/event7"]) == 1


def test_no_device_found_exits_1(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(shuttlemap.app, "find_shuttle_device", lambda: None)
    assert main(["shuttlemap"]) == 1


def test_no_display_exits_1(monkeypatch: pytest.MonkeyPatch):
    def no_display():
        raise DisplayError("unable to open X display")

    monkeypatch.setattr(shuttlemap.app, "open_display", no_display)
    assert main(["shuttlemap", "/dev/input/event7"]) == 1


def test_argparse_errors_exit_2():
    with pytest.raises(SystemExit) as excinfo:
        main(["shuttlemap", "-r"])
    assert excinfo.value.code == 2


def test_settings_are_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    def no_display():
        raise DisplayError("unable to open X display")

    monkeypatch.setattr(shuttlemap.app, "open_display", no_display)
    monkeypatch.setenv("SHUTTLE_CENTER_TIMEOUT", "7ms")
    with caplog.at_level(logging.DEBUG, logger="shuttlemap.app"):
        main(["shuttlemap", "-r", "/tmp/rules", "/dev/input/event7"])
    [logged] = [m for m in caplog.messages if m.startswith("settings: ")]
    assert "'shuttle_center_timeout': '7ms'" in logged
    assert "'device_path': '/dev/input/event7'" in logged
    assert "'config_path': '/tmp/rules'" in logged
