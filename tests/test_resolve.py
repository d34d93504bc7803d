"""
Configuration resolver tests: defaults, scaling, clamps, dict contract.
Run from project root: python -m pytest tests/test_resolve.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from waveform_engine.core.color import BLACK, Color
from waveform_engine.core.types import WaveformConfiguration, WaveformPosition, WaveformStyle
from waveform_engine.params.canonical_defaults import default_scale
from waveform_engine.params.clamp import (
    MIN_LOGICAL_EXTENT,
    MIN_PADDING_FACTOR,
    MIN_SCALE,
    MIN_STRIPE_WIDTH,
    clamp_geometry,
)
from waveform_engine.params.resolve import (
    configuration_from_params,
    resolve_configuration,
    resolved_to_dict,
    scaled,
)


# -----------------------------------------------------------------------------
# Scaling
# -----------------------------------------------------------------------------

def test_scaled_multiplies_size_only():
    config = WaveformConfiguration(size=(100, 50), scale=2.0, style=WaveformStyle.STRIPED)
    out = scaled(config)
    assert out.size == (200.0, 100.0)
    assert out.scale == 2.0
    assert out.style == WaveformStyle.STRIPED
    assert out.color == config.color
    assert config.size == (100, 50)


def test_scaled_without_scale_uses_default(monkeypatch):
    monkeypatch.setenv("WAVEFORM_SCALE", "3")
    out = scaled(WaveformConfiguration(size=(10, 20)))
    assert out.size == (10 * default_scale(), 20 * default_scale())
    assert out.size == (30.0, 60.0)
    assert out.scale is None


def test_resolved_size_is_logical_times_scale():
    resolved = resolve_configuration(WaveformConfiguration(size=(100, 50), scale=3.0))
    assert resolved.logical_size == (100.0, 50.0)
    assert resolved.size == (300.0, 150.0)
    assert resolved.pixel_dimensions == (300, 150)
    assert resolved.sample_count == 300


def test_sample_count_floors_fractional_width():
    resolved = resolve_configuration(WaveformConfiguration(size=(33.4, 20), scale=3.0))
    assert resolved.sample_count == 100
    assert resolved.pixel_dimensions == (100, 60)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

def test_defaults(monkeypatch):
    monkeypatch.delenv("WAVEFORM_SCALE", raising=False)
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10)))
    assert resolved.scale == 1.0
    assert resolved.style == WaveformStyle.GRADIENT
    assert resolved.position == 0.5
    assert resolved.padding_factor == 2.5
    assert resolved.stripe_width == 1.0
    assert resolved.stripe_spacing == 4.0
    assert resolved.color == BLACK
    assert resolved.background_color.alpha == 0.0


def test_default_scale_from_environment(monkeypatch):
    monkeypatch.setenv("WAVEFORM_SCALE", "2")
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10)))
    assert resolved.scale == 2.0
    assert resolved.pixel_dimensions == (20, 20)


@pytest.mark.parametrize("raw", ["abc", "-1", "0"])
def test_bad_environment_scale_falls_back(monkeypatch, raw):
    monkeypatch.setenv("WAVEFORM_SCALE", raw)
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10)))
    assert resolved.scale == 1.0


@pytest.mark.parametrize("position,expected_fraction,expected_padding", [
    (WaveformPosition.TOP, 0.0, 1.5),
    (WaveformPosition.MIDDLE, 0.5, 2.5),
    (WaveformPosition.BOTTOM, 1.0, 1.5),
    (0.25, 0.25, 1.5),
    ("bottom", 1.0, 1.5),
])
def test_padding_factor_depends_on_position(position, expected_fraction, expected_padding):
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10), scale=1.0, position=position))
    assert resolved.position == expected_fraction
    assert resolved.padding_factor == expected_padding


def test_explicit_padding_factor_wins():
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10), scale=1.0, padding_factor=3.0))
    assert resolved.padding_factor == 3.0


def test_unknown_position_name_raises():
    with pytest.raises(ValueError):
        resolve_configuration(WaveformConfiguration(size=(10, 10), scale=1.0, position="left"))


# -----------------------------------------------------------------------------
# Degenerate geometry is clamped, never raised
# -----------------------------------------------------------------------------

def test_zero_scale_is_clamped():
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10), scale=0.0))
    assert resolved.scale == MIN_SCALE
    assert resolved.pixel_dimensions == (1, 1)


def test_stripe_and_padding_clamps():
    resolved = resolve_configuration(WaveformConfiguration(
        size=(10, 10), scale=1.0, stripe_width=0.0, stripe_spacing=-3.0, padding_factor=-1.0,
    ))
    assert resolved.stripe_width == MIN_STRIPE_WIDTH
    assert resolved.stripe_spacing == 0.0
    assert resolved.padding_factor == MIN_PADDING_FACTOR


def test_position_clamped_to_unit_range():
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 10), scale=1.0, position=1.7))
    assert resolved.position == 1.0


def test_clamp_geometry_does_not_mutate():
    values = {"scale": -1.0, "size": (0.0, 5.0), "position": float("nan")}
    out = clamp_geometry(values)
    assert values["scale"] == -1.0
    assert out["scale"] == MIN_SCALE
    assert out["size"][0] > 0
    assert out["size"][1] == 5.0
    assert out["position"] == 0.0


def test_clamp_geometry_non_finite_takes_lower_bound():
    nan, inf = float("nan"), float("inf")
    out = clamp_geometry({
        "scale": inf,
        "size": (nan, -inf),
        "stripe_width": nan,
        "position": inf,
    })
    assert out["scale"] == MIN_SCALE
    assert out["size"] == (MIN_LOGICAL_EXTENT, MIN_LOGICAL_EXTENT)
    assert out["stripe_width"] == MIN_STRIPE_WIDTH
    assert out["position"] == 0.0


@pytest.mark.parametrize("config", [
    WaveformConfiguration(size=(float("nan"), 10), scale=1.0),
    WaveformConfiguration(size=(10, float("inf")), scale=1.0),
    WaveformConfiguration(size=(10, 10), scale=float("inf")),
    WaveformConfiguration(size=(10, 10), scale=1.0, stripe_width=float("nan")),
])
def test_non_finite_geometry_is_rejected(config):
    with pytest.raises(ValueError):
        resolve_configuration(config)


@pytest.mark.parametrize("raw", ["inf", "nan"])
def test_non_finite_environment_scale_falls_back(monkeypatch, raw):
    monkeypatch.setenv("WAVEFORM_SCALE", raw)
    assert default_scale() == 1.0


# -----------------------------------------------------------------------------
# Dict contract
# -----------------------------------------------------------------------------

def test_configuration_from_params():
    config = configuration_from_params({
        "size": [120, 40],
        "scale": 2,
        "style": "striped",
        "position": "top",
        "color": "#ff0000",
        "stripe_spacing": 2,
    })
    resolved = resolve_configuration(config)
    assert resolved.size == (240.0, 80.0)
    assert resolved.style == WaveformStyle.STRIPED
    assert resolved.position == 0.0
    assert resolved.color == Color(1.0, 0.0, 0.0, 1.0)
    assert resolved.stripe_spacing == 2.0
    assert resolved.stripe_width == 1.0


def test_configuration_from_params_size_dict_and_numeric_position():
    config = configuration_from_params({"size": {"width": 10, "height": 20}, "position": 0.75})
    assert config.size == (10.0, 20.0)
    assert config.position == 0.75


def test_configuration_from_params_ignores_unknown_keys():
    config = configuration_from_params({"size": [10, 10], "legacy_flag": True})
    assert config.size == (10.0, 10.0)


@pytest.mark.parametrize("params", [
    {},
    {"size": "big"},
    {"size": [10, 10], "style": "wavy"},
    {"size": [10, 10], "scale": "x"},
    {"size": [10, 10], "color": "nope"},
])
def test_configuration_from_params_rejects_malformed(params):
    with pytest.raises(ValueError):
        configuration_from_params(params)


def test_resolved_to_dict_is_json_friendly():
    resolved = resolve_configuration(WaveformConfiguration(size=(10, 20), scale=2.0, style="filled"))
    out = resolved_to_dict(resolved)
    assert out["pixel_dimensions"] == [20, 40]
    assert out["style"] == "filled"
    assert out["color"] == "#000000ff"
    assert out["background_color"] == "#00000000"
