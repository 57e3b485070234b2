"""
Unit‑test titik masuk (motion_outline.__main__.main): exit code & alur utama.
Jendela HighGUI & capture diganti versi palsu lewat monkeypatch.
"""

import json

import numpy as np
import pytest

from .. import __main__ as entry

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeFrameSource:
    instances = []

    def __init__(self, config):
        self.config = config
        self.is_live = config.is_live
        self.frames = [np.full((30, 40, 3), 80, dtype=np.uint8) for _ in range(5)]
        self.released = False
        FakeFrameSource.instances.append(self)

    def open(self):
        return self

    def read(self):
        return self.frames.pop(0) if self.frames else None

    def release(self):
        self.released = True


class FakePresenter:
    instances = []

    def __init__(self, wait_ms=30):
        self.wait_ms = wait_ms
        self.shown = 0
        self.closed = False
        FakePresenter.instances.append(self)

    def open(self):
        return self

    def show(self, annotated, background):
        assert annotated.shape == background.shape
        self.shown += 1

    def key_pressed(self):
        return self.shown >= 3

    def close(self):
        self.closed = True


@pytest.fixture
def fakes(monkeypatch):
    FakeFrameSource.instances.clear()
    FakePresenter.instances.clear()
    monkeypatch.setattr(entry, "FrameSource", FakeFrameSource)
    monkeypatch.setattr(entry, "WindowPresenter", FakePresenter)
    return FakeFrameSource.instances, FakePresenter.instances

# ---------------------------------------------------------------------------
# TESTS
# ---------------------------------------------------------------------------

def test_runs_until_key_press_and_cleans_up(fakes):
    sources, presenters = fakes
    assert entry.main(["--file", "walk.avi", "--wait-ms", "5"]) == entry.EXIT_OK

    assert sources[0].config.path == "walk.avi"
    assert sources[0].released
    assert presenters[0].wait_ms == 5
    assert presenters[0].shown == 3
    assert presenters[0].closed


def test_prompt_is_used_without_source_flags(fakes, monkeypatch):
    sources, _ = fakes
    answers = iter(["2"])
    monkeypatch.setattr("builtins.input", lambda *a: next(answers))

    assert entry.main([]) == entry.EXIT_OK
    assert sources[0].config.is_live


def test_closed_console_exits_with_input_closed(fakes, monkeypatch):
    def closed(*a):
        raise EOFError
    monkeypatch.setattr("builtins.input", closed)
    assert entry.main([]) == entry.EXIT_INPUT_CLOSED


def test_missing_file_exits_with_source_unavailable(tmp_path, capsys):
    code = entry.main(["--file", str(tmp_path / "nope.avi")])
    assert code == entry.EXIT_SOURCE_UNAVAILABLE
    assert "Could not open video source" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--camera", "0", "--preset", "does-not-exist"],
    ["--camera", "0", "--nmixtures", "0"],
])
def test_bad_configuration_exits_before_opening(fakes, argv):
    sources, _ = fakes
    assert entry.main(argv) == entry.EXIT_BAD_CONFIG
    assert sources == []


def test_file_and_camera_are_mutually_exclusive():
    with pytest.raises(SystemExit):
        entry.parse_arguments(["--file", "a.avi", "--camera", "1"])


def test_log_dir_writes_daily_file(fakes, tmp_path):
    log_dir = tmp_path / "logs"
    assert entry.main(["--camera", "1", "--log-dir", str(log_dir)]) == entry.EXIT_OK
    files = list(log_dir.glob("motion_outline_*.log"))
    assert len(files) == 1


@pytest.mark.parametrize("params", [
    {"history": "abc"},
    {"var_threshold": "x"},
    {"learning_rate": "fast"},
])
def test_wrong_typed_preset_file_exits_with_bad_config(fakes, tmp_path, params):
    sources, _ = fakes
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"x": params}), encoding="utf-8")

    code = entry.main(["--camera", "0", "--preset-file", str(path), "--preset", "x"])

    assert code == entry.EXIT_BAD_CONFIG
    assert sources == []


@pytest.mark.parametrize("value", ["0", "-5", "abc"])
def test_wait_ms_must_be_positive(value):
    with pytest.raises(SystemExit):
        entry.parse_arguments(["--wait-ms", value])


def test_cli_can_turn_shadow_detection_off(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"shady": {"detect_shadows": True}}), encoding="utf-8")
    base = ["--preset-file", str(path), "--preset", "shady"]

    on = entry.build_processor(entry.parse_arguments(base))
    off = entry.build_processor(entry.parse_arguments(base + ["--no-detect-shadows"]))

    assert on.background_model.detect_shadows is True
    assert off.background_model.detect_shadows is False
    assert entry.parse_arguments([]).detect_shadows is None
