"""
Path builder: maps normalized samples to vertical segments around the center line.

x is in points (sample index / scale); y is in pixels. max_amplitude covers every
sample, including the ones skipped by stripe subsampling.
"""
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from waveform_engine.core.types import ResolvedConfiguration, WaveformStyle

MINIMUM_AMPLITUDE = 1.0  # silence still draws a visible line


@dataclass(frozen=True)
class Segment:
    x: float
    y_up: float
    y_down: float

    @property
    def amplitude(self) -> float:
        return (self.y_down - self.y_up) / 2.0


@dataclass(frozen=True)
class WaveformPath:
    segments: Tuple[Segment, ...]
    max_amplitude: float
    center: float

    def __len__(self) -> int:
        return len(self.segments)


def draw_mapping_factor(configuration: ResolvedConfiguration) -> float:
    """Amplitude ceiling in pixels: pixel height / padding factor."""
    return configuration.size[1] / configuration.padding_factor


def stripe_interval(configuration: ResolvedConfiguration, sample_count: int) -> int:
    """
    Draw every n-th sample so stripes land roughly every stripe_width + stripe_spacing.
    Rounds half up; clamped to at least 1 when the stripe density rounds to zero.
    """
    pitch = configuration.stripe_width + configuration.stripe_spacing
    if pitch <= 0:
        return 1
    stripes_across_width = configuration.size[0] / pitch
    if stripes_across_width <= 0:
        return 1
    return max(1, int(math.floor(sample_count / stripes_across_width + 0.5)))


class PathBuilder:
    def __init__(self, configuration: ResolvedConfiguration):
        self.configuration = configuration

    @property
    def center(self) -> float:
        return self.configuration.position * self.configuration.size[1]

    def build(self, samples: Sequence[float]) -> WaveformPath:
        cfg = self.configuration
        center = self.center
        mapping = draw_mapping_factor(cfg)
        sample_count = len(samples)

        striped = cfg.style == WaveformStyle.STRIPED
        every_n = stripe_interval(cfg, sample_count) if striped else 1

        segments = []
        max_amplitude = 0.0
        for x, sample in enumerate(samples):
            inverted = 1.0 - float(sample)
            amplitude = max(MINIMUM_AMPLITUDE, inverted * mapping)
            if not math.isfinite(amplitude):
                # out-of-range input; keep the segment on the canvas
                amplitude = cfg.size[1]
            max_amplitude = max(max_amplitude, amplitude)

            if x % every_n != 0:
                continue

            segments.append(Segment(
                x=x / cfg.scale,
                y_up=center - amplitude,
                y_down=center + amplitude,
            ))

        return WaveformPath(segments=tuple(segments), max_amplitude=max_amplitude, center=center)
