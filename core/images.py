# =============================================================================
# core/images.py  —  Text-to-image via the Hugging Face Inference API
# =============================================================================
#
# HOW IT WORKS:
#   1. Read HF_TOKEN.  No token → explain and stop (no client, no request).
#   2. Ask FLUX.1-schnell (routed through the "together" provider) for one
#      image.  huggingface_hub's InferenceClient is blocking, so the call
#      runs in a worker thread to keep the event loop free.
#   3. Encode the returned PIL image as PNG, then base64, and return it as
#      a single image content item.  InferenceClient hands back a decoded
#      image, not the provider's bytes, so the payload is always a PNG with
#      the same pixels, whatever format the provider sent.
#
# Any failure (bad token, provider error, network) comes back as
# "Error: image generation failed - <reason>" with no image item.
# =============================================================================

import asyncio
import base64
import io
import logging
from typing import Callable, Optional

from huggingface_hub import InferenceClient

from core.config import HF_TOKEN_ENV, get_hf_token
from core.models import ToolResult
from core.text import describe_error

logger = logging.getLogger(__name__)

IMAGE_MODEL = "black-forest-labs/FLUX.1-schnell"
IMAGE_PROVIDER = "together"
IMAGE_MIME_TYPE = "image/png"

MISSING_TOKEN = (
    f"{HF_TOKEN_ENV} environment variable is not set. "
    f"Set {HF_TOKEN_ENV} to use the Hugging Face Inference API."
)


def image_to_png(image) -> bytes:
    """Serialize a PIL image to PNG bytes (lossless, so the pixels are kept)."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def generate_png(prompt: str, num_inference_steps: int, token: str) -> bytes:
    """Blocking call to the inference provider; returns PNG bytes."""
    client = InferenceClient(provider=IMAGE_PROVIDER, api_key=token)
    image = client.text_to_image(
        prompt,
        model=IMAGE_MODEL,
        num_inference_steps=num_inference_steps,
    )
    return image_to_png(image)


async def handle_generate_image(
    args,
    token_provider: Callable[[], Optional[str]] = get_hf_token,
) -> ToolResult:
    token = token_provider()
    if not token:
        logger.warning("Image generation requested but %s is not set", HF_TOKEN_ENV)
        return ToolResult.error(MISSING_TOKEN)

    try:
        png = await asyncio.to_thread(generate_png, args.prompt, args.num_inference_steps, token)
    except Exception as e:
        logger.warning("Image generation failed: %s", e)
        return ToolResult.error(f"image generation failed - {describe_error(e)}")

    logger.info("Generated %d-byte image in %d step(s)", len(png), args.num_inference_steps)
    return ToolResult.image(base64.b64encode(png).decode("ascii"), IMAGE_MIME_TYPE)
