"""
Shared pytest fixtures and configuration for all tests
"""
import io
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from eventvision.services.design_models import Blueprint, MediaAsset
from eventvision.services.google_ai_service import InlineImage
from eventvision.services.media_codec import encode


def make_image_bytes(color: str = "red", fmt: str = "JPEG", size=(64, 48)) -> bytes:
    """Small in-memory image built with Pillow"""
    img = Image.new("RGB", size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("red", "JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("blue", "PNG")


@pytest.fixture
def jpeg_asset(jpeg_bytes) -> MediaAsset:
    return encode(jpeg_bytes, "image/jpeg", "hall.jpg")


@pytest.fixture
def png_asset(png_bytes) -> MediaAsset:
    return encode(png_bytes, "image/png", "stage.png")


@pytest.fixture
def video_asset() -> MediaAsset:
    return encode(b"\x00\x00\x00\x18ftypmp42fake-video", "video/mp4", "walkthrough.mp4")


@pytest.fixture
def generated_image() -> InlineImage:
    """What the image model hands back on success"""
    return InlineImage(data=make_image_bytes("green", "PNG"), mime_type="image/png")


@pytest.fixture
def mock_ai_service(generated_image):
    """AI service double: configured client, successful text and image calls"""
    mock = Mock()
    mock.get_client = Mock(return_value=Mock())
    mock.generate_text = AsyncMock(return_value="Ballroom, 60 x 40 ft. Stage on the north wall.")
    mock.generate_image = AsyncMock(return_value=generated_image)
    return mock


@pytest.fixture
def sample_blueprint(jpeg_asset, png_asset) -> Blueprint:
    return Blueprint(
        text="Ballroom, 60 x 40 ft. Stage on the north wall, 15 round tables.",
        original_assets=(jpeg_asset, png_asset),
        cleaned_assets=(),
        analysis_summary="Analyzed 2 media file(s).",
    )


@pytest.fixture
def progress_messages():
    """Collects progress lines; use ``progress_messages.append`` as the callback"""
    return []
