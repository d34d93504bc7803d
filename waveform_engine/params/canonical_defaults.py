"""
Canonical configuration defaults: single source for unset WaveformConfiguration fields.
Used by resolve_configuration and configuration_from_params so the HTTP contract and the
Python API agree on what an omitted field means.
"""
import logging
import math
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Stand-in for the display scale of the host platform.
SCALE_ENV_VAR = "WAVEFORM_SCALE"
FALLBACK_SCALE = 1.0

# Padding divisors when padding_factor is unset: centered waveforms get more headroom.
CENTERED_PADDING_FACTOR = 2.5
ANCHORED_PADDING_FACTOR = 1.5

CONFIG_DEFAULTS: Dict[str, Any] = {
    "color": "black",
    "background_color": "transparent",
    "style": "gradient",
    "position": "middle",
    "padding_factor": None,  # computed from position
    "stripe_width": 1.0,
    "stripe_spacing": 4.0,
}


def default_scale() -> float:
    """Read the default scale from WAVEFORM_SCALE; fall back to 1.0 on absence or garbage."""
    raw = os.environ.get(SCALE_ENV_VAR)
    if raw is None or raw == "":
        return FALLBACK_SCALE
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", SCALE_ENV_VAR, raw)
        return FALLBACK_SCALE
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring non-positive or non-finite %s=%r", SCALE_ENV_VAR, raw)
        return FALLBACK_SCALE
    return value


def default_padding_factor(position: float) -> float:
    """2.5 for exactly-centered waveforms, 1.5 for anything anchored elsewhere."""
    return CENTERED_PADDING_FACTOR if position == 0.5 else ANCHORED_PADDING_FACTOR
