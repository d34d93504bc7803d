"""
Geometry clamping: replaces values that would divide by zero or draw off-canvas
with safe minimums. Never raises; clamps are logged at debug level.
"""
import logging
import math
from typing import Dict, Any, Optional

from waveform_engine.core.params import clamp_if_bounds

logger = logging.getLogger(__name__)

MIN_SCALE = 1e-3
MIN_LOGICAL_EXTENT = 1e-3
MIN_STRIPE_WIDTH = 1e-3
MIN_PADDING_FACTOR = 1e-3

# key -> (min, max)
GEOMETRY_BOUNDS = {
    "scale": (MIN_SCALE, None),
    "stripe_width": (MIN_STRIPE_WIDTH, None),
    "stripe_spacing": (0.0, None),
    "padding_factor": (MIN_PADDING_FACTOR, None),
    "position": (0.0, 1.0),
}


def _clamp_finite(value, lo: float, hi: Optional[float] = None) -> float:
    if not math.isfinite(float(value)):
        return lo
    return clamp_if_bounds(value, lo, hi)


def clamp_geometry(values: dict) -> Dict[str, Any]:
    """
    Clamp numeric geometry fields to their safe ranges.
    Returns a new dict (does not mutate input). None values are left alone.

    Clamps:
    - scale > 0, stripe_width > 0, padding_factor > 0
    - stripe_spacing >= 0
    - position in [0, 1]
    - both size components > 0
    - non-finite values (NaN, +-inf) take the lower bound
    """
    result = dict(values)

    for key, (lo, hi) in GEOMETRY_BOUNDS.items():
        raw = result.get(key)
        if raw is None:
            continue
        clamped = _clamp_finite(raw, lo, hi)
        if clamped != raw:
            logger.debug("Clamped %s from %r to %r", key, raw, clamped)
        result[key] = clamped

    size = result.get("size")
    if size is not None:
        width, height = size
        clamped_size = (
            _clamp_finite(width, MIN_LOGICAL_EXTENT),
            _clamp_finite(height, MIN_LOGICAL_EXTENT),
        )
        if clamped_size != (width, height):
            logger.debug("Clamped size from %r to %r", size, clamped_size)
        result["size"] = clamped_size

    return result
