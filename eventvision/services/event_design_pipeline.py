"""
End-to-end event design: uploads -> cleanup -> blueprint -> renders
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from eventvision.core.errors import GenerationError
from eventvision.services.blueprint_service import BlueprintService
from eventvision.services.blueprint_service import blueprint_service as default_blueprint_service
from eventvision.services.design_models import Blueprint, Location, MediaAsset, ProgressCallback, RenderedView
from eventvision.services.fallback_renderer import fallback_views
from eventvision.services.render_service import RenderService
from eventvision.services.render_service import render_service as default_render_service

logger = logging.getLogger(__name__)


@dataclass
class DesignResult:
    """Blueprint and the rendered views built from it"""

    blueprint: Blueprint
    views: List[RenderedView]


class EventDesignPipeline:
    """Runs the blueprint and render stages with the shared progress callback"""

    def __init__(
        self,
        blueprint_service: Optional[BlueprintService] = None,
        render_service: Optional[RenderService] = None,
    ):
        self.blueprint_service = blueprint_service or default_blueprint_service
        self.render_service = render_service or default_render_service

    async def build_blueprint(
        self,
        assets: Sequence[MediaAsset],
        prompt_text: str,
        location: Optional[Location] = None,
        website: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Blueprint:
        return await self.blueprint_service.build_blueprint(assets, prompt_text, location, website, on_progress)

    async def render(self, blueprint: Blueprint, on_progress: Optional[ProgressCallback] = None) -> List[RenderedView]:
        """
        Render stage. Never returns a partial set.

        Raises:
            GenerationError: no images to render with
        """
        try:
            return await self.render_service.render_views(blueprint, on_progress)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Render stage failed, returning placeholders for every view: {e}", exc_info=True)
            return fallback_views(blueprint.text)

    async def generate(
        self,
        assets: Sequence[MediaAsset],
        prompt_text: str,
        location: Optional[Location] = None,
        website: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DesignResult:
        """Direct generation without a blueprint review step"""
        blueprint = await self.build_blueprint(assets, prompt_text, location, website, on_progress)
        views = await self.render(blueprint, on_progress)
        return DesignResult(blueprint=blueprint, views=views)


event_design_pipeline = EventDesignPipeline()
