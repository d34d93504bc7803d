"""
Configuration schema for API consumers.
Describes every WaveformConfiguration key; defaults mirror canonical_defaults.CONFIG_DEFAULTS.
"""
from typing import Dict, Any, Literal, Optional

from waveform_engine.params.canonical_defaults import CONFIG_DEFAULTS

# Type definitions
ParamType = Literal["float", "size", "color", "enum"]

# Schema entry structure: type, default, min, max, choices, description
ParamSchemaEntry = Dict[str, Any]


def _make_param(
    param_type: ParamType,
    default: Any,
    min_val: Optional[float],
    max_val: Optional[float],
    description: str,
    choices: Optional[list] = None,
) -> ParamSchemaEntry:
    """Helper to create a schema entry."""
    return {
        "type": param_type,
        "default": default,
        "min": min_val,
        "max": max_val,
        "choices": choices,
        "description": description,
    }


# -----------------------------------------------------------------------------
# PARAM_SCHEMA: metadata per configuration key
# -----------------------------------------------------------------------------

PARAM_SCHEMA: Dict[str, ParamSchemaEntry] = {
    "size": _make_param(
        "size", None, 0.0, None, "Logical [width, height] in points (required)"
    ),
    "scale": _make_param(
        "float", None, 0.0, None, "Points to pixels factor (default: WAVEFORM_SCALE or 1.0)"
    ),
    "color": _make_param(
        "color", CONFIG_DEFAULTS["color"], None, None, "Stroke color; gradient start color"
    ),
    "background_color": _make_param(
        "color", CONFIG_DEFAULTS["background_color"], None, None, "Background fill color"
    ),
    "style": _make_param(
        "enum", CONFIG_DEFAULTS["style"], None, None, "Drawing style",
        choices=["filled", "striped", "gradient"],
    ),
    "position": _make_param(
        "enum", CONFIG_DEFAULTS["position"], 0.0, 1.0,
        "Vertical anchor: top, middle, bottom or a fraction of the height",
        choices=["top", "middle", "bottom"],
    ),
    "padding_factor": _make_param(
        "float", CONFIG_DEFAULTS["padding_factor"], 0.0, None,
        "Height divisor for the amplitude ceiling (default: 2.5 centered, 1.5 otherwise)",
    ),
    "stripe_width": _make_param(
        "float", CONFIG_DEFAULTS["stripe_width"], 0.0, None, "Stripe line width in points (striped style)"
    ),
    "stripe_spacing": _make_param(
        "float", CONFIG_DEFAULTS["stripe_spacing"], 0.0, None, "Gap between stripes in points (striped style)"
    ),
}
