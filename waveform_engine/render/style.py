"""
Style renderer: background, then the path stroked or gradient-filled per WaveformStyle.
"""
from waveform_engine.core.color import highlighted
from waveform_engine.core.types import ResolvedConfiguration, WaveformStyle
from waveform_engine.render.path import WaveformPath
from waveform_engine.render.surface import DrawingSurface

GRADIENT_BRIGHTNESS_ADJUSTMENT = 0.5


def stroke_width(configuration: ResolvedConfiguration) -> float:
    """Line width in points: stripe_width for stripes, a one-pixel hairline otherwise."""
    if configuration.style == WaveformStyle.STRIPED:
        return configuration.stripe_width
    return 1.0 / configuration.scale


class StyleRenderer:
    def __init__(self, configuration: ResolvedConfiguration):
        self.configuration = configuration

    def paint(self, surface: DrawingSurface, path: WaveformPath) -> None:
        cfg = self.configuration
        surface.fill_background(cfg.background_color)
        mask = surface.stroke_mask(path, stroke_width(cfg))

        if cfg.style in (WaveformStyle.FILLED, WaveformStyle.STRIPED):
            surface.fill_mask(mask, cfg.color)
        elif cfg.style == WaveformStyle.GRADIENT:
            surface.fill_mask_gradient(
                mask,
                start_y=path.center - path.max_amplitude,
                end_y=path.center + path.max_amplitude,
                start_color=cfg.color,
                end_color=highlighted(cfg.color, GRADIENT_BRIGHTNESS_ADJUSTMENT),
            )
        else:
            raise ValueError(f"Unknown style: {cfg.style!r}")
