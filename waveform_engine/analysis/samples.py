"""
Sample provider: turns decoded audio into per-column normalized loudness samples.

Sample convention: 1.0 is silence (the noise floor, -50 dB by default) and 0.0 is
the loudest bucket in the file. Larger value means quieter.
"""
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

import numpy as np
import torch

from waveform_engine.core.io import AudioIO
from waveform_engine.core.types import AudioBuffer

logger = logging.getLogger(__name__)

NOISE_FLOOR_DB = -50.0


class SampleProvider(Protocol):
    def samples(self, count: int) -> Optional[np.ndarray]:
        """Exactly `count` normalized samples in time order, or None on failure."""
        ...


def _peak_per_bucket(mono: torch.Tensor, count: int) -> torch.Tensor:
    """Peak |x| over `count` contiguous buckets. Empty buckets (short audio) read as 0."""
    buckets = torch.tensor_split(mono, count)
    return torch.stack([
        b.abs().max() if b.numel() > 0 else torch.zeros((), dtype=mono.dtype)
        for b in buckets
    ])


def normalize_db(peaks: torch.Tensor, noise_floor_db: float = NOISE_FLOOR_DB) -> torch.Tensor:
    """
    Linear peaks -> dB clamped at the noise floor -> [0, 1] with 0 at the loudest bucket.
    All-silent input maps to all ones.
    """
    db = 20.0 * torch.log10(torch.clamp(peaks, min=1e-12))
    db = torch.clamp(db, min=noise_floor_db)
    max_db = torch.max(db)
    span = float(max_db) - noise_floor_db
    if span <= 0.0:
        return torch.ones_like(db)
    return torch.clamp((max_db - db) / span, 0.0, 1.0)


class WaveformAnalyzer:
    """
    SampleProvider over an AudioBuffer or an audio file.
    Files are decoded lazily on each samples() call; nothing is cached.
    """

    def __init__(self, audio: Union[AudioBuffer, str, Path], noise_floor_db: float = NOISE_FLOOR_DB):
        self.audio = audio
        self.noise_floor_db = float(noise_floor_db)

    def _load(self) -> Optional[AudioBuffer]:
        if isinstance(self.audio, AudioBuffer):
            return self.audio
        return AudioIO.load(self.audio)

    def samples(self, count: int) -> Optional[np.ndarray]:
        count = int(count)
        if count < 0:
            logger.warning("Negative sample count requested: %d", count)
            return None

        buffer = self._load()
        if buffer is None:
            return None

        data = np.nan_to_num(np.asarray(buffer.samples, dtype=np.float32))
        if data.size == 0:
            logger.warning("Audio source is empty; no samples to analyze")
            return None
        if count == 0:
            return np.zeros(0, dtype=np.float32)

        mono = torch.from_numpy(data)
        if mono.dim() > 1:
            mono = mono.mean(dim=1)

        peaks = _peak_per_bucket(mono, count)
        normalized = normalize_db(peaks, self.noise_floor_db)
        return normalized.numpy().astype(np.float32)
