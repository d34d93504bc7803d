import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import soundfile as sf
from PIL import Image

from waveform_engine.core.types import AudioBuffer

logger = logging.getLogger(__name__)


class AudioIO:
    @staticmethod
    def load(source: Union[str, Path, io.BytesIO]) -> Optional[AudioBuffer]:
        """Decodes an audio file (path or file-like). Returns None if it cannot be read."""
        try:
            data, sample_rate = sf.read(source, dtype="float32", always_2d=False)
        except (RuntimeError, OSError, TypeError) as exc:
            logger.warning("Could not decode audio from %r: %s", source, exc)
            return None
        return AudioBuffer(samples=np.asarray(data, dtype=np.float32), sample_rate=int(sample_rate))

    @staticmethod
    def from_bytes(payload: bytes) -> Optional[AudioBuffer]:
        """Decodes audio file bytes (for API requests)."""
        return AudioIO.load(io.BytesIO(payload))


class ImageIO:
    @staticmethod
    def to_png_bytes(image: Image.Image) -> bytes:
        """Returns image as PNG bytes (for API responses)."""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
