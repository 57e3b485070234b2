"""
Unit‑test preset parameter (utils.presets): resolve, override & file JSON.
"""

import json

import pytest

from ..utils.presets import (
    BG_PRESETS,
    DEFAULT_PRESET,
    load_presets,
    resolve_preset,
    split_params,
)


def test_default_preset_matches_classic_setup():
    params = resolve_preset()
    assert params['nmixtures'] == 3
    assert params['detect_shadows'] is False
    assert params['kernel_size'] == 3
    assert params['erode_iterations'] == 1 and params['dilate_iterations'] == 1


def test_overrides_apply_and_none_is_ignored():
    params = resolve_preset(DEFAULT_PRESET, overrides={'nmixtures': 5, 'detect_shadows': None})
    assert params['nmixtures'] == 5
    assert params['detect_shadows'] is False
    # preset bawaan tidak ikut berubah
    assert BG_PRESETS[DEFAULT_PRESET]['nmixtures'] == 3


def test_unknown_preset_raises():
    with pytest.raises(ValueError, match="Unknown preset"):
        resolve_preset("nope")


def test_unknown_override_raises():
    with pytest.raises(ValueError, match="unknown parameter"):
        resolve_preset(overrides={'threshold': 3})


def test_split_params():
    bg, cleaner, contour = split_params(resolve_preset())
    assert set(bg) == {'history', 'var_threshold', 'detect_shadows', 'nmixtures',
                       'background_ratio', 'learning_rate'}
    assert set(cleaner) == {'kernel_size', 'erode_iterations', 'dilate_iterations'}
    assert contour == {'min_contour_area': 0}


def test_load_presets_from_json(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({
        "parking-lot": {"nmixtures": 4, "min_contour_area": 120},
        "default": {"history": 250},
    }), encoding="utf-8")

    presets = load_presets(str(path))

    assert presets["parking-lot"]["nmixtures"] == 4
    assert presets["parking-lot"]["history"] == BG_PRESETS[DEFAULT_PRESET]["history"]
    assert presets["default"]["history"] == 250
    assert "static-scene" in presets
    assert BG_PRESETS[DEFAULT_PRESET]["history"] == 500


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"x": 3}', '{"x": {"bogus": 1}}'])
def test_load_presets_rejects_bad_files(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_presets(str(path))


def test_load_presets_missing_file(tmp_path):
    with pytest.raises(ValueError):
        load_presets(str(tmp_path / "missing.json"))


@pytest.mark.parametrize("params", [
    {"history": "abc"},
    {"history": 2.5},
    {"nmixtures": True},
    {"kernel_size": "3"},
    {"erode_iterations": None},
    {"var_threshold": "x"},
    {"background_ratio": [0.9]},
    {"learning_rate": "fast"},
    {"min_contour_area": False},
    {"detect_shadows": 1},
    {"detect_shadows": "yes"},
])
def test_load_presets_rejects_wrong_value_types(tmp_path, params):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps({"x": params}), encoding="utf-8")
    with pytest.raises(ValueError, match="must be"):
        load_presets(str(path))


@pytest.mark.parametrize("params", [
    {"history": 0},
    {"nmixtures": 0},
    {"kernel_size": -1},
    {"dilate_iterations": -1},
])
def test_load_presets_rejects_out_of_range_values(tmp_path, params):
    path = tmp_path / "range.json"
    path.write_text(json.dumps({"x": params}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_presets(str(path))


def test_numeric_params_accept_int_and_float(tmp_path):
    path = tmp_path / "ok.json"
    path.write_text(json.dumps({"x": {
        "var_threshold": 20, "learning_rate": 0.005, "min_contour_area": 12.5,
        "detect_shadows": True,
    }}), encoding="utf-8")
    assert load_presets(str(path))["x"]["learning_rate"] == 0.005


def test_override_with_wrong_type_raises():
    with pytest.raises(ValueError, match="must be an integer"):
        resolve_preset(overrides={'nmixtures': "5"})
