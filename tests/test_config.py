#!/usr/bin/env python3
"""
Configuration tests - defaults, presets and YAML loading
"""

import pytest

from stripcutter.config import PRESETS, DetectionParams, SliceConfig, load_config


def test_defaults():
    params = DetectionParams()
    assert params.sensitivity == 50
    assert params.fast_mode is True
    assert params.min_segment_height == 100
    assert (params.analysis_width, params.column_stride, params.skip_rows) == (200, 2, 10)
    assert SliceConfig().gap == 0


def test_clamped_sensitivity():
    assert DetectionParams(sensitivity=0).clamped_sensitivity() == 1
    assert DetectionParams(sensitivity=101).clamped_sensitivity() == 100
    assert DetectionParams(sensitivity=42).clamped_sensitivity() == 42


def test_dict_round_trip_ignores_unknown_keys():
    data = DetectionParams(sensitivity=70).to_dict()
    data["unknown"] = 1
    assert DetectionParams.from_dict(data) == DetectionParams(sensitivity=70)


def test_copy_is_independent():
    params = DetectionParams()
    other = params.copy()
    other.sensitivity = 90
    assert params.sensitivity == 50


def test_presets_are_valid():
    for name, (detection, slicing) in PRESETS.items():
        assert 1 <= detection.sensitivity <= 100, name
        assert detection.min_segment_height > 0, name
        assert slicing.image_format.startswith("."), name


def test_load_yaml(tmp_path):
    path = tmp_path / "strip.yaml"
    path.write_text(
        "detection:\n"
        "  sensitivity: 80\n"
        "  fast_mode: false\n"
        "  bogus: 3\n"
        "slicing:\n"
        "  gap: 6\n"
        "  image_format: .png\n",
        encoding="utf-8",
    )
    detection, slicing = load_config(path)
    assert detection.sensitivity == 80
    assert detection.fast_mode is False
    assert detection.min_segment_height == 100
    assert slicing.gap == 6
    assert slicing.image_format == ".png"


def test_load_yaml_on_top_of_preset(tmp_path):
    path = tmp_path / "strip.yaml"
    path.write_text("slicing:\n  quality: 70\n", encoding="utf-8")
    base = tuple(c.copy() for c in PRESETS["Noisy scan"])
    detection, slicing = load_config(path, base=base)
    assert detection.sensitivity == PRESETS["Noisy scan"][0].sensitivity
    assert slicing.gap == PRESETS["Noisy scan"][1].gap
    assert slicing.quality == 70


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == (DetectionParams(), SliceConfig())


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
