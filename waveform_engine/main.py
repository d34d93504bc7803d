from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging

# Configure Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("waveform-engine")

app = FastAPI(
    title="Waveform Image Engine",
    version="1.0.0",
    description="Static waveform image rendering"
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow any local port
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "waveform-image-engine"}

import base64
import binascii
import hashlib
from typing import Optional

from PIL import Image

from waveform_engine.analysis.samples import WaveformAnalyzer
from waveform_engine.core.io import AudioIO, ImageIO
from waveform_engine.core.params import to_float
from waveform_engine.params.resolve import configuration_from_params, resolve_configuration, resolved_to_dict
from waveform_engine.params.schema import PARAM_SCHEMA
from waveform_engine.render.drawer import WaveformImageDrawer

drawer = WaveformImageDrawer()


def _resolve_body_config(body: dict):
    config = body.get("config", {})
    if not isinstance(config, dict):
        raise ValueError("config must be an object")
    return resolve_configuration(configuration_from_params(config))


def _image_fingerprint(png_bytes: bytes, image: Image.Image) -> dict:
    """SHA256 of the encoded PNG plus raster size (determinism checks)."""
    return {
        "sha256": hashlib.sha256(png_bytes).hexdigest(),
        "width": image.size[0],
        "height": image.size[1],
    }


def _image_response(image: Optional[Image.Image], resolved) -> dict:
    if image is None:
        return {"status": "error", "message": "Could not acquire samples"}
    png_bytes = ImageIO.to_png_bytes(image)
    return {
        "image": base64.b64encode(png_bytes).decode("utf-8"),
        "resolved_config": resolved_to_dict(resolved),
        "fingerprint": _image_fingerprint(png_bytes, image),
    }


@app.get("/schema")
async def schema():
    return PARAM_SCHEMA


@app.post("/render")
async def render_samples(body: dict):
    """
    Renders already-normalized samples.
    Body: { samples: [float, ...], config: {...} }
    Returns JSON with base64-encoded PNG and resolved_config.
    """
    samples = body.get("samples")
    if not isinstance(samples, list):
        return {"status": "error", "message": "samples must be a list of numbers"}
    try:
        samples = [to_float(s, "samples") for s in samples]
        resolved = _resolve_body_config(body)
    except (TypeError, ValueError) as exc:
        return {"status": "error", "message": str(exc)}

    image = drawer.render(samples, resolved)
    return _image_response(image, resolved)


@app.post("/render/audio")
async def render_audio(body: dict):
    """
    Renders an encoded audio file (WAV/FLAC/OGG, base64).
    Body: { audio: <base64>, config: {...} }
    """
    try:
        payload = base64.b64decode(body.get("audio") or "", validate=True)
        resolved = _resolve_body_config(body)
    except (binascii.Error, TypeError, ValueError) as exc:
        return {"status": "error", "message": str(exc)}

    buffer = AudioIO.from_bytes(payload)
    if buffer is None:
        return {"status": "error", "message": "Could not decode audio"}

    image = drawer.waveform_image(WaveformAnalyzer(buffer), resolved)
    return _image_response(image, resolved)


if __name__ == "__main__":
    uvicorn.run("waveform_engine.main:app", host="0.0.0.0", port=8000, reload=True)
