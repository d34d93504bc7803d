"""
Waveform image rendering: path building, style painting and the drawer entry points.
"""
from waveform_engine.render.drawer import WaveformImageDrawer, render
from waveform_engine.render.path import PathBuilder, WaveformPath, Segment
from waveform_engine.render.style import StyleRenderer
from waveform_engine.render.surface import DrawingSurface

__all__ = [
    "WaveformImageDrawer",
    "render",
    "PathBuilder",
    "WaveformPath",
    "Segment",
    "StyleRenderer",
    "DrawingSurface",
]
