"""
Unit tests for render generation
Tests view ordering, per-view fallback and reference image selection
"""
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from eventvision.core.errors import NoImagesError
from eventvision.services.design_models import Blueprint
from eventvision.services.fallback_renderer import fallback_description, placeholder_for
from eventvision.services.render_service import RenderService, select_reference_images
from eventvision.services.view_prompts import FLOOR_PLAN, MAIN_EVENT_SPACE, SIDE_VIEW, VIEW_LABELS


class TestReferenceSelection:
    """Tests for select_reference_images"""

    @pytest.mark.unit
    def test_prefers_cleaned_images(self, sample_blueprint, png_asset):
        blueprint = Blueprint(
            text=sample_blueprint.text,
            original_assets=sample_blueprint.original_assets,
            cleaned_assets=(png_asset,),
            analysis_summary="",
        )

        assert select_reference_images(blueprint) == [png_asset]

    @pytest.mark.unit
    def test_falls_back_to_originals(self, sample_blueprint, jpeg_asset, png_asset):
        assert select_reference_images(sample_blueprint) == [jpeg_asset, png_asset]

    @pytest.mark.unit
    def test_ignores_videos(self, video_asset, jpeg_asset):
        blueprint = Blueprint("text", (video_asset, jpeg_asset), (video_asset,), "")

        assert select_reference_images(blueprint) == [jpeg_asset]

    @pytest.mark.unit
    def test_no_supported_images(self, video_asset):
        blueprint = Blueprint("text", (video_asset,), (), "")

        with pytest.raises(NoImagesError):
            select_reference_images(blueprint)


class TestRenderViews:
    """Tests for RenderService.render_views"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_one_view_per_label_in_order(self, mock_ai_service, sample_blueprint):
        service = RenderService(mock_ai_service)

        views = await service.render_views(sample_blueprint)

        assert [v.label for v in views] == [FLOOR_PLAN, MAIN_EVENT_SPACE, SIDE_VIEW]
        assert all(not v.is_fallback for v in views)
        assert all(v.image_data.startswith("data:image/png;base64,") for v in views)
        assert views[0].description == "AI-generated floor plan of your event, based on the venue blueprint."

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_each_instruction_carries_blueprint_and_references(self, mock_ai_service, sample_blueprint):
        service = RenderService(mock_ai_service)

        await service.render_views(sample_blueprint)

        for call in mock_ai_service.generate_image.await_args_list:
            instruction, images = call.args
            assert sample_blueprint.text in instruction
            assert "REFERENCE IMAGES: 2 venue image(s) attached." in instruction
            assert "pre-cleaned" not in instruction
            assert list(images) == list(sample_blueprint.original_assets)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cleaned_references_are_flagged(self, mock_ai_service, jpeg_asset):
        cleaned = replace(jpeg_asset, name="cleaned_hall.jpg")
        blueprint = Blueprint("text", (jpeg_asset,), (cleaned,), "")
        service = RenderService(mock_ai_service)

        await service.render_views(blueprint)

        instruction, _ = mock_ai_service.generate_image.await_args.args
        assert "pre-cleaned" in instruction

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_single_failure_falls_back_for_that_view_only(
        self, mock_ai_service, sample_blueprint, generated_image
    ):
        mock_ai_service.generate_image = AsyncMock(side_effect=[generated_image, RuntimeError("boom"), None])
        service = RenderService(mock_ai_service)

        views = await service.render_views(sample_blueprint)

        assert [v.is_fallback for v in views] == [False, True, True]
        assert views[1].image_data == placeholder_for(MAIN_EVENT_SPACE, sample_blueprint.text)
        assert views[2].description == fallback_description(SIDE_VIEW)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_every_call_failing_yields_placeholders(self, mock_ai_service, sample_blueprint):
        mock_ai_service.generate_image = AsyncMock(side_effect=RuntimeError("service down"))
        service = RenderService(mock_ai_service)

        views = await service.render_views(sample_blueprint)

        assert [v.label for v in views] == list(VIEW_LABELS)
        assert [v.image_data for v in views] == [placeholder_for(label) for label in VIEW_LABELS]
        assert all(v.image_data.startswith("data:image/svg+xml;base64,") for v in views)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_images_raises_before_any_call(self, mock_ai_service, video_asset):
        service = RenderService(mock_ai_service)

        with pytest.raises(NoImagesError):
            await service.render_views(Blueprint("text", (video_asset,), (), ""))

        mock_ai_service.generate_image.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_progress_messages(self, mock_ai_service, sample_blueprint, progress_messages):
        service = RenderService(mock_ai_service)

        await service.render_views(sample_blueprint, progress_messages.append)

        assert progress_messages == [
            "Generating Floor Plan (1/3)...",
            "Generating Main Event Space (2/3)...",
            "Generating Side View (3/3)...",
            "Render generation complete.",
        ]
