"""
Configuration resolution: fill unset fields from canonical defaults, clamp degenerate
geometry, then scale the logical size into pixel space.
Downstream geometry only ever sees a ResolvedConfiguration.
"""
import dataclasses
import logging
from typing import Dict, Any, Optional

from waveform_engine.core.color import parse_color
from waveform_engine.core.params import get_param, to_float, to_size
from waveform_engine.core.types import (
    PositionLike,
    ResolvedConfiguration,
    Size,
    WaveformConfiguration,
    WaveformPosition,
    WaveformStyle,
)
from waveform_engine.params.canonical_defaults import (
    CONFIG_DEFAULTS,
    default_padding_factor,
    default_scale,
)
from waveform_engine.params.clamp import clamp_geometry
from waveform_engine.params.schema import PARAM_SCHEMA

logger = logging.getLogger(__name__)


def position_fraction(position: PositionLike) -> float:
    """Map a named anchor, its name, or a bare number to a vertical fraction."""
    if isinstance(position, WaveformPosition):
        return float(position.value)
    if isinstance(position, str):
        try:
            return float(WaveformPosition[position.strip().upper()].value)
        except KeyError:
            raise ValueError(f"Unknown position: {position!r}") from None
    return to_float(position, "position")


def parse_style(style: Any) -> WaveformStyle:
    if isinstance(style, WaveformStyle):
        return style
    try:
        return WaveformStyle(str(style).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown style: {style!r}") from None


def scale_size(size: Size, scale: float) -> Size:
    return (size[0] * scale, size[1] * scale)


def scaled(configuration: WaveformConfiguration) -> WaveformConfiguration:
    """
    Return an equivalent configuration whose size is size x scale component-wise.
    All other fields are unchanged. An unset scale takes the default scale.
    """
    scale = default_scale() if configuration.scale is None else configuration.scale
    return dataclasses.replace(configuration, size=scale_size(configuration.size, scale))


def resolve_configuration(configuration: WaveformConfiguration) -> ResolvedConfiguration:
    """
    Resolve a user configuration by:
    1. Filling unset scale/stripe fields from canonical defaults
    2. Normalizing position to a fraction and colors to Color
    3. Clamping degenerate geometry (zero scale, zero stripe density, ...)
    4. Computing padding_factor from position when unset
    5. Scaling the logical size to pixels

    Raises ValueError only for unparseable values (unknown style name, bad color).
    """
    values = {
        "size": to_size(configuration.size),
        "scale": default_scale() if configuration.scale is None else to_float(configuration.scale, "scale"),
        "position": position_fraction(configuration.position),
        "padding_factor": (
            None if configuration.padding_factor is None
            else to_float(configuration.padding_factor, "padding_factor")
        ),
        "stripe_width": to_float(
            CONFIG_DEFAULTS["stripe_width"] if configuration.stripe_width is None else configuration.stripe_width,
            "stripe_width",
        ),
        "stripe_spacing": to_float(
            CONFIG_DEFAULTS["stripe_spacing"] if configuration.stripe_spacing is None else configuration.stripe_spacing,
            "stripe_spacing",
        ),
    }
    values = clamp_geometry(values)

    padding_factor = values["padding_factor"]
    if padding_factor is None:
        padding_factor = default_padding_factor(values["position"])

    logical = dataclasses.replace(configuration, size=values["size"], scale=values["scale"])
    pixel = scaled(logical)

    return ResolvedConfiguration(
        logical_size=logical.size,
        size=pixel.size,
        scale=values["scale"],
        color=parse_color(configuration.color),
        background_color=parse_color(configuration.background_color),
        style=parse_style(configuration.style),
        position=values["position"],
        padding_factor=padding_factor,
        stripe_width=values["stripe_width"],
        stripe_spacing=values["stripe_spacing"],
    )


def configuration_from_params(params: dict) -> WaveformConfiguration:
    """
    Build a WaveformConfiguration from a plain dict (HTTP/JSON contract).
    Missing keys take CONFIG_DEFAULTS; unknown keys are logged and ignored.
    Raises ValueError when size is missing or malformed.
    """
    params = params or {}
    unknown = sorted(k for k in params if k not in PARAM_SCHEMA)
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", unknown)

    if get_param(params, "size") is None:
        raise ValueError("size is required")

    def _optional_float(name: str) -> Optional[float]:
        raw = get_param(params, name)
        return None if raw is None else to_float(raw, name)

    position = get_param(params, "position", CONFIG_DEFAULTS["position"])
    return WaveformConfiguration(
        size=to_size(get_param(params, "size")),
        scale=_optional_float("scale"),
        color=parse_color(get_param(params, "color", CONFIG_DEFAULTS["color"])),
        background_color=parse_color(get_param(params, "background_color", CONFIG_DEFAULTS["background_color"])),
        style=parse_style(get_param(params, "style", CONFIG_DEFAULTS["style"])),
        position=position if isinstance(position, str) else to_float(position, "position"),
        padding_factor=_optional_float("padding_factor"),
        stripe_width=_optional_float("stripe_width"),
        stripe_spacing=_optional_float("stripe_spacing"),
    )


def resolved_to_dict(resolved: ResolvedConfiguration) -> Dict[str, Any]:
    """JSON-friendly view of a resolved configuration (API responses)."""
    return {
        "logical_size": list(resolved.logical_size),
        "size": list(resolved.size),
        "pixel_dimensions": list(resolved.pixel_dimensions),
        "scale": resolved.scale,
        "color": resolved.color.to_hex(),
        "background_color": resolved.background_color.to_hex(),
        "style": resolved.style.value,
        "position": resolved.position,
        "padding_factor": resolved.padding_factor,
        "stripe_width": resolved.stripe_width,
        "stripe_spacing": resolved.stripe_spacing,
    }
