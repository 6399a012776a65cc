"""Unit tests for generate-image: credential gate, PNG payload, failures."""
import asyncio
import base64
import io
from unittest.mock import patch

import pytest
from PIL import Image

from core.catalog import ImageInput
from core.images import IMAGE_MODEL, IMAGE_PROVIDER, handle_generate_image, image_to_png

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _sample_image() -> Image.Image:
    image = Image.new("RGB", (4, 3), (200, 10, 30))
    image.putpixel((1, 1), (0, 255, 0))
    image.putpixel((3, 2), (10, 20, 250))
    return image


def _as_provider_sent(image: Image.Image, fmt: str) -> Image.Image:
    """What InferenceClient returns: the provider's bytes decoded by PIL."""
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return Image.open(io.BytesIO(buffer.getvalue()))


def _decode(result) -> Image.Image:
    png = base64.b64decode(result.content[0].data)
    assert png.startswith(PNG_SIGNATURE)
    return Image.open(io.BytesIO(png))


@patch("core.images.InferenceClient")
def test_missing_token_makes_no_call(mock_client_cls):
    result = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))

    mock_client_cls.assert_not_called()
    assert len(result.content) == 1
    assert result.content[0].kind == "text"
    assert "HF_TOKEN" in result.content[0].text
    assert result.is_error


@patch("core.images.InferenceClient")
def test_empty_token_env_makes_no_call(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "")

    result = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))

    mock_client_cls.assert_not_called()
    assert "HF_TOKEN" in result.content[0].text


@pytest.mark.parametrize("token", [None, ""])
@patch("core.images.InferenceClient")
def test_injected_provider_without_token_makes_no_call(mock_client_cls, token):
    result = asyncio.run(handle_generate_image(ImageInput(prompt="x"), token_provider=lambda: token))

    mock_client_cls.assert_not_called()
    assert [item.kind for item in result.content] == ["text"]
    assert "HF_TOKEN" in result.content[0].text


@patch("core.images.InferenceClient")
def test_success_returns_single_png_image(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    source = _sample_image()
    mock_client_cls.return_value.text_to_image.return_value = _as_provider_sent(source, "PNG")

    result = asyncio.run(handle_generate_image(ImageInput(prompt="a cat", num_inference_steps=6)))

    assert len(result.content) == 1
    item = result.content[0]
    assert item.kind == "image"
    assert item.mime_type == "image/png"
    decoded = _decode(result)
    assert decoded.format == "PNG"
    assert decoded.size == source.size
    assert list(decoded.convert("RGB").getdata()) == list(source.getdata())

    mock_client_cls.assert_called_once_with(provider=IMAGE_PROVIDER, api_key="hf_test")
    mock_client_cls.return_value.text_to_image.assert_called_once_with(
        "a cat", model=IMAGE_MODEL, num_inference_steps=6
    )


@patch("core.images.InferenceClient")
def test_jpeg_from_provider_is_reencoded_as_png(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    jpeg = _as_provider_sent(_sample_image(), "JPEG")
    expected_pixels = list(jpeg.convert("RGB").getdata())
    mock_client_cls.return_value.text_to_image.return_value = jpeg

    result = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))

    decoded = _decode(result)
    assert decoded.format == "PNG"
    assert result.content[0].mime_type == "image/png"
    assert list(decoded.convert("RGB").getdata()) == expected_pixels


@patch("core.images.InferenceClient")
def test_default_steps(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    mock_client_cls.return_value.text_to_image.return_value = _sample_image()

    asyncio.run(handle_generate_image(ImageInput(prompt="a dog")))

    _, kwargs = mock_client_cls.return_value.text_to_image.call_args
    assert kwargs["num_inference_steps"] == 4


@patch("core.images.InferenceClient")
def test_provider_failure_is_text_error(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_bad")
    mock_client_cls.return_value.text_to_image.side_effect = RuntimeError("401 Unauthorized")

    result = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))

    assert [item.kind for item in result.content] == ["text"]
    assert result.content[0].text == "Error: image generation failed - 401 Unauthorized"


def test_image_to_png_is_lossless():
    source = _sample_image()
    png = image_to_png(source)
    assert png.startswith(PNG_SIGNATURE)
    assert list(Image.open(io.BytesIO(png)).convert("RGB").getdata()) == list(source.getdata())


@patch("core.images.InferenceClient")
def test_identical_calls_give_identical_output(mock_client_cls, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test")
    mock_client_cls.return_value.text_to_image.side_effect = lambda *a, **kw: _sample_image()

    first = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))
    second = asyncio.run(handle_generate_image(ImageInput(prompt="a cat")))
    assert first.to_dict() == second.to_dict()
