"""
Param parsing utilities for the dict contract (HTTP/JSON bodies).
Supports dotted keys for nested dicts; coercion helpers raise ValueError with the key name.
"""
import math
from typing import Any, Optional, Tuple


# -----------------------------------------------------------------------------
# Lookup helpers
# -----------------------------------------------------------------------------

def get_param(params: dict, name: str, default: Any = None) -> Any:
    """
    Read a value from params, supporting dotted keys for nested dicts.
    E.g. get_param(p, "config.stripe_width", 1.0) -> p["config"]["stripe_width"] or default.
    If any intermediate key is missing or not a dict, returns default.
    """
    if not params or not name:
        return default
    keys = name.split(".")
    current = params
    for key in keys[:-1]:
        next_val = current.get(key)
        if next_val is None or not isinstance(next_val, dict):
            return default
        current = next_val
    return current.get(keys[-1], default)


def to_float(value: Any, name: str) -> float:
    """Coerce to a finite float or raise ValueError naming the offending key."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(result):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return result


def to_size(value: Any, name: str = "size") -> Tuple[float, float]:
    """Accept [w, h], (w, h) or {"width": w, "height": h}."""
    if isinstance(value, dict):
        if "width" not in value or "height" not in value:
            raise ValueError(f"{name} needs width and height, got {value!r}")
        return (to_float(value["width"], f"{name}.width"), to_float(value["height"], f"{name}.height"))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return (to_float(value[0], f"{name}[0]"), to_float(value[1], f"{name}[1]"))
    raise ValueError(f"{name} must be [width, height], got {value!r}")


def clamp_if_bounds(
    value: float,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> float:
    """
    Clamp value to [min, max] when bounds are not None.
    If both are None, returns value unchanged.
    """
    v = float(value)
    if min is not None and v < min:
        return min
    if max is not None and v > max:
        return max
    return v
