"""
Unit tests for image pre-cleaning
Tests ordering, per-image fallback and the unavailable-service path
"""
from dataclasses import replace
from unittest.mock import AsyncMock, Mock

import pytest

from eventvision.core.errors import AIServiceNotConfiguredError
from eventvision.services.google_ai_service import InlineImage
from eventvision.services.image_cleanup_service import CLEANED_NAME_PREFIX, ImageCleanupService


class TestImageCleanup:
    """Tests for ImageCleanupService.clean"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cleans_every_supported_image(self, mock_ai_service, jpeg_asset, png_asset):
        service = ImageCleanupService(mock_ai_service)

        cleaned = await service.clean([jpeg_asset, png_asset])

        assert [a.name for a in cleaned] == ["cleaned_hall.jpg", "cleaned_stage.png"]
        assert all(a.mime_type == "image/png" for a in cleaned)
        assert mock_ai_service.generate_image.await_count == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cleaned_images_come_before_pass_through(self, mock_ai_service, jpeg_asset, video_asset, png_asset):
        service = ImageCleanupService(mock_ai_service)

        cleaned = await service.clean([video_asset, jpeg_asset, png_asset])

        assert [a.name for a in cleaned] == ["cleaned_hall.jpg", "cleaned_stage.png", "walkthrough.mp4"]
        assert cleaned[-1] is video_asset

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_image_is_kept_in_place(self, jpeg_asset, png_asset, generated_image):
        ai_service = Mock()
        ai_service.get_client = Mock()
        ai_service.generate_image = AsyncMock(side_effect=[RuntimeError("quota"), generated_image])
        service = ImageCleanupService(ai_service)

        cleaned = await service.clean([jpeg_asset, png_asset])

        assert cleaned[0] is jpeg_asset
        assert cleaned[1].name == CLEANED_NAME_PREFIX + png_asset.name

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_middle_failure_of_three(self, jpeg_asset, png_asset, generated_image):
        third = replace(jpeg_asset, name="bar.jpg")
        ai_service = Mock()
        ai_service.get_client = Mock()
        ai_service.generate_image = AsyncMock(side_effect=[generated_image, RuntimeError("quota"), generated_image])
        service = ImageCleanupService(ai_service)

        cleaned = await service.clean([jpeg_asset, png_asset, third])

        assert [a.name for a in cleaned] == ["cleaned_hall.jpg", "stage.png", "cleaned_bar.jpg"]
        assert cleaned[1] is png_asset
        assert ai_service.generate_image.await_count == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_image_returned_keeps_original(self, mock_ai_service, jpeg_asset):
        mock_ai_service.generate_image = AsyncMock(return_value=None)
        service = ImageCleanupService(mock_ai_service)

        cleaned = await service.clean([jpeg_asset])

        assert cleaned == [jpeg_asset]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_mime_type_keeps_original_type(self, mock_ai_service, jpeg_asset):
        mock_ai_service.generate_image = AsyncMock(return_value=InlineImage(data=b"cleaned"))
        service = ImageCleanupService(mock_ai_service)

        cleaned = await service.clean([jpeg_asset])

        assert cleaned[0].mime_type == "image/jpeg"
        assert cleaned[0].payload.startswith("data:image/jpeg;base64,")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unconfigured_service_returns_input_unchanged(self, jpeg_asset, video_asset):
        ai_service = Mock()
        ai_service.get_client = Mock(side_effect=AIServiceNotConfiguredError("no key"))
        ai_service.generate_image = AsyncMock()
        service = ImageCleanupService(ai_service)

        cleaned = await service.clean([video_asset, jpeg_asset])

        assert cleaned == [video_asset, jpeg_asset]
        ai_service.generate_image.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nothing_to_clean(self, mock_ai_service, video_asset):
        service = ImageCleanupService(mock_ai_service)

        cleaned = await service.clean([video_asset])

        assert cleaned == [video_asset]
        mock_ai_service.generate_image.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reports_progress_per_image(self, mock_ai_service, jpeg_asset, png_asset, progress_messages):
        service = ImageCleanupService(mock_ai_service)

        await service.clean([jpeg_asset, png_asset], progress_messages.append)

        assert progress_messages == [
            "Cleaning up input images...",
            "Cleaning image 1 of 2...",
            "Cleaning image 2 of 2...",
            "Image cleanup complete.",
        ]
