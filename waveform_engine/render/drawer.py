"""
Waveform image entry points.

render(samples, configuration) is the core: resolve -> build path -> paint on a scoped
surface -> detached RGBA image. The convenience entry points ask a SampleProvider for
floor(pixel width) samples first; if it fails they return None without acquiring a surface.
"""
import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union

from PIL import Image

from waveform_engine.analysis.samples import SampleProvider, WaveformAnalyzer
from waveform_engine.core.color import ColorLike
from waveform_engine.core.types import (
    AudioBuffer,
    PositionLike,
    ResolvedConfiguration,
    Size,
    WaveformConfiguration,
    WaveformPosition,
    WaveformStyle,
)
from waveform_engine.params.resolve import resolve_configuration
from waveform_engine.render.path import PathBuilder
from waveform_engine.render.style import StyleRenderer
from waveform_engine.render.surface import DrawingSurface

logger = logging.getLogger(__name__)

ConfigurationLike = Union[WaveformConfiguration, ResolvedConfiguration]
SurfaceFactory = Callable[[Tuple[int, int], float], DrawingSurface]


def _resolved(configuration: ConfigurationLike) -> ResolvedConfiguration:
    if isinstance(configuration, ResolvedConfiguration):
        return configuration
    return resolve_configuration(configuration)


class WaveformImageDrawer:
    def __init__(self, surface_factory: SurfaceFactory = DrawingSurface):
        self.surface_factory = surface_factory

    def render(self, samples: Optional[Sequence[float]], configuration: ConfigurationLike) -> Optional[Image.Image]:
        """Render samples under configuration. None samples (failed acquisition) -> None."""
        if samples is None:
            return None
        resolved = _resolved(configuration)
        path = PathBuilder(resolved).build(samples)
        logger.debug(
            "Rendering %d segments (%d samples), style=%s, size=%s",
            len(path), len(samples), resolved.style.value, resolved.pixel_dimensions,
        )
        with self.surface_factory(resolved.pixel_dimensions, resolved.scale) as surface:
            StyleRenderer(resolved).paint(surface, path)
            return surface.snapshot()

    def waveform_image(self, provider: SampleProvider, configuration: ConfigurationLike) -> Optional[Image.Image]:
        """Fetch floor(pixel width) samples from provider and render them."""
        resolved = _resolved(configuration)
        samples = provider.samples(resolved.sample_count)
        if samples is None:
            logger.warning("Sample acquisition failed; no image rendered")
            return None
        return self.render(samples, resolved)

    def waveform_image_from_audio(
        self,
        audio: AudioBuffer,
        size: Size,
        color: ColorLike = "black",
        background_color: ColorLike = "transparent",
        style: WaveformStyle = WaveformStyle.GRADIENT,
        position: PositionLike = WaveformPosition.MIDDLE,
        scale: Optional[float] = None,
        padding_factor: Optional[float] = None,
        stripe_width: Optional[float] = None,
        stripe_spacing: Optional[float] = None,
    ) -> Optional[Image.Image]:
        configuration = WaveformConfiguration(
            size=size,
            scale=scale,
            color=color,
            background_color=background_color,
            style=style,
            position=position,
            padding_factor=padding_factor,
            stripe_width=stripe_width,
            stripe_spacing=stripe_spacing,
        )
        return self.waveform_image(WaveformAnalyzer(audio), configuration)

    def waveform_image_from_path(
        self,
        audio_path: Union[str, Path],
        size: Size,
        color: ColorLike = "black",
        background_color: ColorLike = "transparent",
        style: WaveformStyle = WaveformStyle.GRADIENT,
        position: PositionLike = WaveformPosition.MIDDLE,
        scale: Optional[float] = None,
        padding_factor: Optional[float] = None,
        stripe_width: Optional[float] = None,
        stripe_spacing: Optional[float] = None,
    ) -> Optional[Image.Image]:
        configuration = WaveformConfiguration(
            size=size,
            scale=scale,
            color=color,
            background_color=background_color,
            style=style,
            position=position,
            padding_factor=padding_factor,
            stripe_width=stripe_width,
            stripe_spacing=stripe_spacing,
        )
        return self.waveform_image(WaveformAnalyzer(Path(audio_path)), configuration)


def render(samples: Optional[Sequence[float]], configuration: ConfigurationLike) -> Optional[Image.Image]:
    """Module-level shortcut for WaveformImageDrawer().render."""
    return WaveformImageDrawer().render(samples, configuration)
