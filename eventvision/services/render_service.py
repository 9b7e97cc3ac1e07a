"""
Render generation: blueprint + venue images -> labeled floor plan and event renders
"""
import logging
from typing import List, Optional, Sequence

from eventvision.core.errors import NoImagesError
from eventvision.services.design_models import (
    Blueprint,
    MediaAsset,
    ProgressCallback,
    RenderedView,
    ViewSpec,
    report_progress,
)
from eventvision.services.fallback_renderer import fallback_view
from eventvision.services.google_ai_service import GoogleAIStudioService, google_ai_service
from eventvision.services.image_cleanup_service import CLEANED_NAME_PREFIX
from eventvision.services.media_codec import is_supported_image
from eventvision.services.view_prompts import VIEW_SPECS, reference_trailer

logger = logging.getLogger(__name__)


def select_reference_images(blueprint: Blueprint) -> List[MediaAsset]:
    """
    Images to render with: cleaned uploads first, original uploads otherwise.

    Raises:
        NoImagesError: neither set holds a supported image
    """
    cleaned = [asset for asset in blueprint.cleaned_assets if is_supported_image(asset)]
    if cleaned:
        return cleaned

    originals = [asset for asset in blueprint.original_assets if is_supported_image(asset)]
    if originals:
        return originals

    raise NoImagesError()


class RenderService:
    """Generates one image per view, falling back to a placeholder per view"""

    def __init__(
        self, ai_service: Optional[GoogleAIStudioService] = None, view_specs: Sequence[ViewSpec] = VIEW_SPECS
    ):
        self.ai_service = ai_service or google_ai_service
        self.view_specs = tuple(view_specs)

    async def render_views(
        self, blueprint: Blueprint, on_progress: Optional[ProgressCallback] = None
    ) -> List[RenderedView]:
        """
        Render every view in declaration order.

        Always returns one RenderedView per view spec. A failed or empty
        generation for a view is replaced by that view's placeholder.

        Raises:
            NoImagesError: the blueprint carries no supported images
        """
        images = select_reference_images(blueprint)
        pre_cleaned = any(asset.name.startswith(CLEANED_NAME_PREFIX) for asset in images)
        trailer = reference_trailer(len(images), pre_cleaned)

        views = []
        total = len(self.view_specs)
        for index, spec in enumerate(self.view_specs, start=1):
            report_progress(on_progress, f"Generating {spec.label} ({index}/{total})...")
            views.append(await self._render_view(spec, blueprint.text, images, trailer))

        report_progress(on_progress, "Render generation complete.")
        fallback_count = sum(1 for view in views if view.is_fallback)
        logger.info(f"Rendered {total - fallback_count}/{total} views ({fallback_count} placeholder(s))")
        return views

    async def _render_view(
        self, spec: ViewSpec, blueprint_text: str, images: Sequence[MediaAsset], trailer: str
    ) -> RenderedView:
        instruction = spec.build_prompt(blueprint_text) + trailer

        try:
            result = await self.ai_service.generate_image(instruction, images)
        except Exception as e:
            logger.warning(f"{spec.label} generation failed, using placeholder: {e}")
            return fallback_view(spec.label, blueprint_text)

        if result is None:
            logger.warning(f"No image returned for {spec.label}, using placeholder")
            return fallback_view(spec.label, blueprint_text)

        return RenderedView(
            image_data=result.to_data_url(),
            description=f"AI-generated {spec.label.lower()} of your event, based on the venue blueprint.",
            label=spec.label,
        )


render_service = RenderService()
