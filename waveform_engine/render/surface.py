"""
Scoped drawing surface over a Pillow RGBA canvas.

Use as a context manager: the canvas exists only between __enter__ and __exit__,
and is released on every exit path. Painting is mask based: a path is first turned
into a coverage mask (its stroked outline), then a solid color or a vertical gradient
is composited through that mask. No antialiasing, so output is byte-for-byte stable.
"""
import math
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from waveform_engine.core.color import Color
from waveform_engine.render.path import WaveformPath

_EPS = 1e-6


class DrawingSurface:
    def __init__(self, size: Tuple[int, int], scale: float):
        self.size = (int(size[0]), int(size[1]))
        self.scale = float(scale)
        self._image: Optional[Image.Image] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def __enter__(self) -> "DrawingSurface":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def acquire(self) -> None:
        if self._image is not None:
            raise RuntimeError("Drawing surface already acquired")
        self._image = Image.new("RGBA", self.size, (0, 0, 0, 0))

    def release(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    @property
    def acquired(self) -> bool:
        return self._image is not None

    def _canvas(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Drawing surface used outside of its scope")
        return self._image

    def snapshot(self) -> Image.Image:
        """Detached copy of the canvas; survives release()."""
        return self._canvas().copy()

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def line_width_pixels(self, line_width_points: float) -> int:
        return max(1, int(round(line_width_points * self.scale)))

    def stroke_mask(self, path: WaveformPath, line_width_points: float) -> Image.Image:
        """
        Coverage mask ("L", 0/255) of the path's stroked outline with butt caps.
        A segment covers rows floor(y_up)..ceil(y_down)-1 and line-width columns
        centered on x * scale. Off-canvas parts are clipped.
        """
        width, height = self.size
        mask = Image.new("L", self.size, 0)
        draw = ImageDraw.Draw(mask)
        w = self.line_width_pixels(line_width_points)

        for seg in path.segments:
            column = seg.x * self.scale
            x0 = int(math.floor(column - (w - 1) / 2.0 + _EPS))
            x1 = x0 + w - 1
            y0 = int(math.floor(seg.y_up))
            y1 = int(math.ceil(seg.y_down)) - 1

            x0, x1 = max(0, x0), min(width - 1, x1)
            y0, y1 = max(0, y0), min(height - 1, y1)
            if x1 < x0 or y1 < y0:
                continue
            draw.rectangle([x0, y0, x1, y1], fill=255)

        return mask

    # -------------------------------------------------------------------------
    # Paint
    # -------------------------------------------------------------------------

    def fill_background(self, color: Color) -> None:
        canvas = self._canvas()
        ImageDraw.Draw(canvas).rectangle([0, 0, self.size[0] - 1, self.size[1] - 1], fill=color.to_rgba8())

    def fill_mask(self, mask: Image.Image, color: Color) -> None:
        rows = np.tile(np.array(color.to_rgba8(), dtype=np.uint8), (self.size[1], 1))
        self._composite(mask, rows)

    def fill_mask_gradient(
        self,
        mask: Image.Image,
        start_y: float,
        end_y: float,
        start_color: Color,
        end_color: Color,
    ) -> None:
        """
        Vertical linear gradient from start_y (start_color) to end_y (end_color),
        extended past both ends, painted through mask.
        """
        rows = vertical_gradient(self.size[1], start_y, end_y, start_color, end_color)
        self._composite(mask, rows)

    def _composite(self, mask: Image.Image, rows: np.ndarray) -> None:
        """Source-over composite of per-row RGBA colors, alpha scaled by mask coverage."""
        width, height = self.size
        layer = np.broadcast_to(rows[:, None, :], (height, width, 4)).copy()
        coverage = np.asarray(mask, dtype=np.uint16)
        layer[..., 3] = ((layer[..., 3].astype(np.uint16) * coverage + 127) // 255).astype(np.uint8)
        self._image = Image.alpha_composite(self._canvas(), Image.fromarray(layer))


def vertical_gradient(
    height: int,
    start_y: float,
    end_y: float,
    start_color: Color,
    end_color: Color,
) -> np.ndarray:
    """(height, 4) uint8 RGBA ramp sampled at pixel centers; clamps outside [start_y, end_y]."""
    ys = np.arange(height, dtype=np.float64) + 0.5
    span = end_y - start_y
    if span > 0:
        t = np.clip((ys - start_y) / span, 0.0, 1.0)
    else:
        t = np.zeros(height, dtype=np.float64)
    start = np.array(start_color.to_rgba8(), dtype=np.float64)
    end = np.array(end_color.to_rgba8(), dtype=np.float64)
    rows = start[None, :] * (1.0 - t[:, None]) + end[None, :] * t[:, None]
    return np.round(rows).astype(np.uint8)
