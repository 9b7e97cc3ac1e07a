"""
Pre-cleaning of venue screenshots before they are used as generation references
"""
import logging
from typing import List, Optional, Sequence

from eventvision.services.design_models import MediaAsset, ProgressCallback, report_progress
from eventvision.services.google_ai_service import GoogleAIStudioService, google_ai_service
from eventvision.services.media_codec import is_supported_image

logger = logging.getLogger(__name__)

CLEANED_NAME_PREFIX = "cleaned_"

CLEANUP_PROMPT = """This image is a screenshot from a virtual walkthrough or listing page of an event venue.

Remove every user interface element and artifact from it:
- navigation arrows, hotspots, buttons, menus and toolbars
- minimaps, compass widgets and floor-plan overlays
- watermarks, logos, captions and any other text overlays
- compression artifacts, stitching seams and blur from the virtual tour

Fill the uncovered areas so the venue looks like a clean, natural photograph.
Do NOT change the architecture, materials, lighting, furniture or camera angle."""


class ImageCleanupService:
    """Asks the image model to strip UI chrome from uploaded venue images"""

    def __init__(self, ai_service: Optional[GoogleAIStudioService] = None):
        self.ai_service = ai_service or google_ai_service

    async def clean(
        self, assets: Sequence[MediaAsset], on_progress: Optional[ProgressCallback] = None
    ) -> List[MediaAsset]:
        """
        Clean every supported image, one at a time.

        Returns cleaned images in their original order followed by the
        pass-through assets (videos etc.) in their original order. Any image
        whose cleanup fails is kept as uploaded. If the cleanup phase itself
        cannot run, the input is returned unchanged.
        """
        report_progress(on_progress, "Cleaning up input images...")

        cleanable = [asset for asset in assets if is_supported_image(asset)]
        pass_through = [asset for asset in assets if not is_supported_image(asset)]

        if not cleanable:
            return list(assets)

        try:
            self.ai_service.get_client()

            cleaned = []
            for index, asset in enumerate(cleanable, start=1):
                report_progress(on_progress, f"Cleaning image {index} of {len(cleanable)}...")
                cleaned.append(await self._clean_one(asset))
        except Exception as e:
            logger.error(f"Image cleanup unavailable, using original uploads: {e}")
            return list(assets)

        report_progress(on_progress, "Image cleanup complete.")
        logger.info(
            f"Cleaned {sum(1 for a in cleaned if a.name.startswith(CLEANED_NAME_PREFIX))}/{len(cleaned)} images, "
            f"{len(pass_through)} passed through"
        )
        return cleaned + pass_through

    async def _clean_one(self, asset: MediaAsset) -> MediaAsset:
        try:
            result = await self.ai_service.generate_image(CLEANUP_PROMPT, [asset])
        except Exception as e:
            logger.warning(f"Cleanup failed for {asset.name}, keeping original: {e}")
            return asset

        if result is None:
            logger.info(f"No cleaned image returned for {asset.name}, keeping original")
            return asset

        mime_type = result.mime_type or asset.mime_type
        return MediaAsset(
            payload=result.to_data_url(mime_type),
            mime_type=mime_type,
            kind=asset.kind,
            name=f"{CLEANED_NAME_PREFIX}{asset.name}",
        )


image_cleanup_service = ImageCleanupService()
