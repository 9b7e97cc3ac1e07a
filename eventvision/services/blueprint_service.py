"""
Blueprint generation: venue media + event vision -> textual event blueprint
"""
import logging
from typing import Optional, Sequence

from eventvision.core.errors import BlueprintGenerationError, MissingPromptError, NoImagesError
from eventvision.services.design_models import Blueprint, Location, MediaAsset, ProgressCallback, report_progress
from eventvision.services.google_ai_service import GoogleAIStudioService, google_ai_service
from eventvision.services.image_cleanup_service import ImageCleanupService

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"


def build_analysis_prompt(
    prompt_text: str, location: Optional[Location] = None, website: Optional[str] = None, media_count: int = 0
) -> str:
    """Instruction for the text/vision model"""
    location_line = location.describe() if location is not None else NOT_PROVIDED
    website_line = website.strip() if website and website.strip() else NOT_PROVIDED

    return f"""You are an expert event designer and venue analyst. Study the attached venue media and produce a MASTER BLUEPRINT for the event described below.

EVENT VISION: {prompt_text}
VENUE LOCATION: {location_line}
VENUE WEBSITE: {website_line}
ATTACHED MEDIA: {media_count} file(s)

Follow this checklist exactly:

1. VENUE TYPE
   - Identify the kind of venue (ballroom, garden, rooftop, barn, warehouse, restaurant, beach, etc.)
   - Note indoor/outdoor status, ceiling type and overall architectural style

2. SPATIAL MAP
   - Describe the layout using directional references (north/south/east/west wall, left/right of the main entrance, far end, center)
   - Estimate dimensions in feet for the main space, derived from visible reference objects (doors ~7 ft tall, standard chairs ~18 in seat height, tables ~30 in high, windows, people)
   - Locate entrances, windows, columns, stairs, built-in bars, stages and power or service access

3. CONSTRAINTS AND LIMITATIONS
   - Fixed elements that cannot move, low ceilings, uneven floors, narrow passages
   - Capacity limits, sight-line obstructions, weather exposure, noise or lighting issues

4. LAYOUT RECOMMENDATION FOR THIS EVENT
   - Where each functional zone goes (ceremony/stage, dining, dance floor, bar, lounge, buffet, entrance/welcome, photo area)
   - Table count, shape and arrangement for the expected guest count
   - Decor, lighting and color palette that fit the event vision and respect the venue's real architecture

Write the blueprint as clear structured prose with headings. It will be used verbatim as the brief for a floor plan and photorealistic renders of this exact venue."""


def build_analysis_summary(
    media_count: int, prompt_text: str, location: Optional[Location] = None, website: Optional[str] = None
) -> str:
    """Short diagnostic summary shown next to the blueprint"""
    location_line = location.describe() if location is not None else NOT_PROVIDED
    website_line = website.strip() if website and website.strip() else NOT_PROVIDED
    return (
        f"Analyzed {media_count} media file(s). "
        f"Location: {location_line}. "
        f"Website: {website_line}. "
        f"Event vision: {prompt_text}"
    )


class BlueprintService:
    """Builds the event blueprint with the text/vision model"""

    def __init__(
        self,
        ai_service: Optional[GoogleAIStudioService] = None,
        cleanup_service: Optional[ImageCleanupService] = None,
    ):
        self.ai_service = ai_service or google_ai_service
        self.cleanup_service = cleanup_service or ImageCleanupService(self.ai_service)

    async def build_blueprint(
        self,
        assets: Sequence[MediaAsset],
        prompt_text: str,
        location: Optional[Location] = None,
        website: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Blueprint:
        """
        Clean the uploads, then ask the text model for the venue/event blueprint.

        Raises:
            MissingPromptError: prompt is blank (before any network call)
            NoImagesError: no media, no location and no website (before any network call)
            BlueprintGenerationError: the analysis call failed
        """
        if not prompt_text or not prompt_text.strip():
            raise MissingPromptError()
        if not assets and location is None and not (website and website.strip()):
            raise NoImagesError()

        original_assets = tuple(assets)
        try:
            cleaned_assets = tuple(await self.cleanup_service.clean(original_assets, on_progress))

            report_progress(on_progress, "Analyzing venue and building blueprint...")
            instruction = build_analysis_prompt(prompt_text, location, website, len(cleaned_assets))
            text = await self.ai_service.generate_text(instruction, cleaned_assets)
        except Exception as e:
            logger.error(f"Blueprint generation failed: {e}", exc_info=True)
            raise BlueprintGenerationError() from e

        report_progress(on_progress, "Blueprint ready.")
        logger.info(f"Blueprint generated: {len(text)} chars from {len(cleaned_assets)} media file(s)")

        return Blueprint(
            text=text,
            original_assets=original_assets,
            cleaned_assets=cleaned_assets,
            analysis_summary=build_analysis_summary(len(original_assets), prompt_text, location, website),
        )


blueprint_service = BlueprintService()
