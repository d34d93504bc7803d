from dataclasses import dataclass
from enum import Enum
import numpy as np
from typing import Optional, Tuple, Union

from waveform_engine.core.color import Color, ColorLike


class WaveformStyle(str, Enum):
    FILLED = "filled"
    STRIPED = "striped"
    GRADIENT = "gradient"


class WaveformPosition(Enum):
    """Named vertical anchors; any float fraction in [0, 1] is accepted as well."""
    TOP = 0.0
    MIDDLE = 0.5
    BOTTOM = 1.0


PositionLike = Union[WaveformPosition, float]
Size = Tuple[float, float]


@dataclass
class AudioBuffer:
    samples: np.ndarray  # float32, shape (n,) or (n, channels)
    sample_rate: int


@dataclass(frozen=True)
class WaveformConfiguration:
    """User-facing configuration; unset optional fields take defaults at resolve time."""
    size: Size                      # logical (width, height) in points
    scale: Optional[float] = None   # points -> pixels
    color: ColorLike = "black"
    background_color: ColorLike = "transparent"
    style: WaveformStyle = WaveformStyle.GRADIENT
    position: PositionLike = WaveformPosition.MIDDLE
    padding_factor: Optional[float] = None
    stripe_width: Optional[float] = None
    stripe_spacing: Optional[float] = None


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Fully populated configuration. size is in pixels (logical_size x scale)."""
    logical_size: Size
    size: Size
    scale: float
    color: Color
    background_color: Color
    style: WaveformStyle
    position: float
    padding_factor: float
    stripe_width: float
    stripe_spacing: float

    @property
    def pixel_dimensions(self) -> Tuple[int, int]:
        """Integer raster size."""
        return (max(1, int(round(self.size[0]))), max(1, int(round(self.size[1]))))

    @property
    def sample_count(self) -> int:
        """Number of samples requested from a provider: floor(pixel width)."""
        return max(0, int(self.size[0]))
