"""
Device-independent RGBA color and the brightness shift used for gradient end stops.
Components are floats in [0, 1]; conversion to 8-bit happens only at paint time.
"""
import colorsys
from dataclasses import dataclass
from typing import Any, Tuple, Union

from PIL import ImageColor

ColorLike = Union["Color", str, Tuple[float, ...]]


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


@dataclass(frozen=True)
class Color:
    """RGBA color, components in [0, 1]."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "red", _clamp01(self.red))
        object.__setattr__(self, "green", _clamp01(self.green))
        object.__setattr__(self, "blue", _clamp01(self.blue))
        object.__setattr__(self, "alpha", _clamp01(self.alpha))

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        """8-bit RGBA tuple for Pillow."""
        return tuple(int(round(c * 255.0)) for c in (self.red, self.green, self.blue, self.alpha))

    def to_hex(self) -> str:
        r, g, b, a = self.to_rgba8()
        return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


BLACK = Color(0.0, 0.0, 0.0, 1.0)
CLEAR = Color(0.0, 0.0, 0.0, 0.0)


def parse_color(value: Any) -> Color:
    """
    Accepts a Color, a Pillow color string ("black", "#ff8800", "#ff880080", "rgb(...)"),
    or a 3/4-tuple. Tuples of ints are read as 0-255, tuples of floats as 0-1.
    Raises ValueError for anything else.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        if value.strip().lower() in ("clear", "transparent"):
            return CLEAR
        rgba = ImageColor.getcolor(value, "RGBA")
        return Color(*(c / 255.0 for c in rgba))
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        if all(isinstance(c, int) and not isinstance(c, bool) for c in value):
            return Color(*(c / 255.0 for c in value))
        try:
            return Color(*(float(c) for c in value))
        except (TypeError, ValueError):
            pass
    raise ValueError(f"Unsupported color value: {value!r}")


def highlighted(color: Color, brightness_adjustment: float = 0.25) -> Color:
    """
    Return color with HSV brightness raised by brightness_adjustment (capped at 1.0).
    Hue, saturation and alpha are preserved.
    """
    h, s, v = colorsys.rgb_to_hsv(color.red, color.green, color.blue)
    v = min(1.0, v + brightness_adjustment)
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    return Color(r, g, b, color.alpha)
