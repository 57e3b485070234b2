"""
utils/presets.py
Preset parameter untuk background subtraction, pembersih mask & kontur.
Preset tambahan bisa dimuat dari file JSON.
"""
import json
import logging
from copy import deepcopy

logger = logging.getLogger(__name__)

DEFAULT_PRESET = "default"

BG_PRESETS = {
    # nmixtures 3 & shadow off: rentang 3-5 disarankan paper MOG
    "default": {
        'history': 500,
        'var_threshold': 16,
        'detect_shadows': False,
        'nmixtures': 3,
        'background_ratio': 0.9,
        'learning_rate': -1,
        'kernel_size': 3,
        'erode_iterations': 1,
        'dilate_iterations': 1,
        'min_contour_area': 0
    },
    "dynamic-scene": {
        'history': 200,
        'var_threshold': 20,
        'detect_shadows': False,
        'nmixtures': 5,
        'background_ratio': 0.8,
        'learning_rate': -1,
        'kernel_size': 3,
        'erode_iterations': 1,
        'dilate_iterations': 1,
        'min_contour_area': 50
    },
    "static-scene": {
        'history': 1000,
        'var_threshold': 25,
        'detect_shadows': False,
        'nmixtures': 3,
        'background_ratio': 0.9,
        'learning_rate': 0.002,
        'kernel_size': 3,
        'erode_iterations': 1,
        'dilate_iterations': 1,
        'min_contour_area': 0
    }
}

BG_PARAM_KEYS = ('history', 'var_threshold', 'detect_shadows', 'nmixtures',
                 'background_ratio', 'learning_rate')
CLEANER_PARAM_KEYS = ('kernel_size', 'erode_iterations', 'dilate_iterations')
CONTOUR_PARAM_KEYS = ('min_contour_area',)

# Parameter lain (threshold, ratio, learning rate, area) cukup berupa angka
INT_PARAMS = ('history', 'nmixtures', 'kernel_size', 'erode_iterations', 'dilate_iterations')
BOOL_PARAMS = ('detect_shadows',)


def load_presets(path):
    """
    Muat preset tambahan dari file JSON berbentuk {"nama": {param: nilai}}.

    Returns:
        dict preset gabungan (bawaan + file); preset file menimpa bawaan

    Raises:
        ValueError: file tidak bisa dibaca, bukan JSON, atau berisi
            parameter yang tidak dikenal / bertipe salah
    """
    try:
        with open(path, encoding='utf-8') as f:
            loaded = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot load preset file {path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ValueError(f"Preset file {path} must contain a JSON object")

    presets = deepcopy(BG_PRESETS)
    for name, params in loaded.items():
        if not isinstance(params, dict):
            raise ValueError(f"Preset '{name}' must be a JSON object")
        _check_params(name, params)
        # Preset baru mewarisi nilai default untuk parameter yang tidak diisi
        merged = deepcopy(presets.get(name, BG_PRESETS[DEFAULT_PRESET]))
        merged.update(params)
        presets[name] = merged
    logger.info(f"Loaded {len(loaded)} preset(s) from {path}")
    return presets


def resolve_preset(name=DEFAULT_PRESET, overrides=None, presets=None):
    """
    Ambil parameter preset lalu terapkan override (mis. dari argumen CLI).
    Override bernilai None diabaikan.

    Raises:
        ValueError: nama preset tidak ada atau override tidak valid
    """
    presets = presets if presets is not None else BG_PRESETS
    if name not in presets:
        raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(sorted(presets))}")

    params = deepcopy(presets[name])
    if overrides:
        clean = {k: v for k, v in overrides.items() if v is not None}
        _check_params(name, clean)
        params.update(clean)
    return params


def split_params(params):
    """Pisahkan dict preset menjadi (bg_params, cleaner_params, contour_params)."""
    return (
        {k: params[k] for k in BG_PARAM_KEYS if k in params},
        {k: params[k] for k in CLEANER_PARAM_KEYS if k in params},
        {k: params[k] for k in CONTOUR_PARAM_KEYS if k in params},
    )


def _check_params(name, params):
    known = set(BG_PARAM_KEYS + CLEANER_PARAM_KEYS + CONTOUR_PARAM_KEYS)
    unknown = set(params) - known
    if unknown:
        raise ValueError(f"Preset '{name}' has unknown parameter(s): {', '.join(sorted(unknown))}")

    # bool adalah subclass int, jadi dicek terpisah
    for key, value in params.items():
        if key in BOOL_PARAMS:
            ok = isinstance(value, bool)
            expected = "a boolean"
        elif key in INT_PARAMS:
            ok = isinstance(value, int) and not isinstance(value, bool)
            expected = "an integer"
        else:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            expected = "a number"
        if not ok:
            raise ValueError(f"Preset '{name}': '{key}' must be {expected}, got {value!r}")

    for key in ('history', 'nmixtures', 'kernel_size'):
        if key in params and params[key] < 1:
            raise ValueError(f"Preset '{name}': '{key}' must be at least 1, got {params[key]}")
    for key in ('erode_iterations', 'dilate_iterations'):
        if key in params and params[key] < 0:
            raise ValueError(f"Preset '{name}': '{key}' must not be negative, got {params[key]}")
