"""
Google AI Studio service for venue analysis and image generation
"""
import asyncio
import base64
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from google import genai
from google.genai import types

from eventvision.core.config import settings
from eventvision.core.errors import AIServiceNotConfiguredError
from eventvision.services.design_models import MediaAsset
from eventvision.services.media_codec import strip, to_data_url

logger = logging.getLogger(__name__)


@dataclass
class InlineImage:
    """Binary image payload returned by the image model"""

    data: bytes
    mime_type: Optional[str] = None

    def to_data_url(self, default_mime_type: str = "image/png") -> str:
        return to_data_url(self.data, self.mime_type or default_mime_type)


class GoogleAIStudioService:
    """Service for Google AI Studio integration"""

    def __init__(self, api_key: Optional[str] = None):
        """Initialize Google AI Studio service"""
        self.api_key = settings.google_ai_api_key if api_key is None else api_key
        self.text_model = settings.google_ai_text_model
        self.image_model = settings.google_ai_image_model
        self.usage_stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "total_processing_time": 0.0,
            "last_reset": datetime.now(),
        }

        if self.api_key:
            self.genai_client = genai.Client(api_key=self.api_key)
            self.genai_configured = True

            if len(self.api_key) > 12:
                masked_key = f"{self.api_key[:8]}...{self.api_key[-4:]}"
                logger.info(f"Google AI API Key loaded: {masked_key}")

            logger.info(f"Google GenAI Client initialized (text: {self.text_model}, image: {self.image_model})")
        else:
            self.genai_configured = False
            self.genai_client = None
            logger.warning("Google AI API key not configured - venue analysis and rendering will not be available")

    def get_client(self) -> genai.Client:
        """Return the GenAI client or raise if no API key is configured"""
        if not self.genai_configured:
            raise AIServiceNotConfiguredError("Google AI API key not configured")
        return self.genai_client

    def _build_contents(self, prompt: str, media: Sequence[MediaAsset]) -> List[types.Part]:
        parts = [types.Part(text=prompt)]
        for asset in media:
            parts.append(types.Part(inline_data=types.Blob(mime_type=asset.mime_type, data=base64.b64decode(strip(asset)))))
        return parts

    async def _generate(self, model: str, contents: List[types.Part], config: types.GenerateContentConfig) -> Any:
        """Run one blocking generate_content call in the default executor"""
        client = self.get_client()

        def _run_generate():
            return client.models.generate_content(model=model, contents=contents, config=config)

        start_time = time.time()
        self.usage_stats["total_requests"] += 1

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(None, _run_generate)
        except Exception as e:
            self.usage_stats["failed_requests"] += 1
            logger.error(f"Google AI request to {model} failed: {e}")
            raise

        processing_time = time.time() - start_time
        self.usage_stats["successful_requests"] += 1
        self.usage_stats["total_processing_time"] += processing_time
        logger.info(f"Google AI request to {model} successful - Time: {processing_time:.2f}s")
        return response

    async def generate_text(self, prompt: str, media: Sequence[MediaAsset] = ()) -> str:
        """
        Ask the text/vision model about a prompt and attached media.

        Returns:
            The model's free text, verbatim (empty string if it produced none)
        """
        config = types.GenerateContentConfig(temperature=settings.google_ai_temperature)
        response = await self._generate(self.text_model, self._build_contents(prompt, media), config)
        return response.text or ""

    async def generate_image(self, prompt: str, media: Sequence[MediaAsset] = ()) -> Optional[InlineImage]:
        """
        Ask the image model for an image.

        Returns:
            The first inline image in the response, or None if the model returned no image
        """
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            temperature=settings.google_ai_image_temperature,
        )
        response = await self._generate(self.image_model, self._build_contents(prompt, media), config)
        return self._extract_inline_image(response)

    @staticmethod
    def _extract_inline_image(response: Any) -> Optional[InlineImage]:
        parts = None
        if getattr(response, "parts", None):
            parts = response.parts
        elif getattr(response, "candidates", None):
            candidate = response.candidates[0]
            content = getattr(candidate, "content", None)
            if content is not None:
                parts = content.parts

        for part in parts or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or not inline_data.data:
                continue
            image_bytes = inline_data.data
            if isinstance(image_bytes, str):
                image_bytes = base64.b64decode(image_bytes)
            mime_type = getattr(inline_data, "mime_type", None)
            return InlineImage(data=image_bytes, mime_type=mime_type)

        return None

    async def get_usage_statistics(self) -> Dict[str, Any]:
        """Get API usage statistics"""
        return {
            **self.usage_stats,
            "success_rate": (self.usage_stats["successful_requests"] / max(self.usage_stats["total_requests"], 1) * 100),
            "average_processing_time": (
                self.usage_stats["total_processing_time"] / max(self.usage_stats["successful_requests"], 1)
            ),
        }

    async def health_check(self) -> Dict[str, Any]:
        """Report configuration and usage without calling the API"""
        return {
            "status": "healthy" if self.genai_configured else "unconfigured",
            "api_key_valid": self.genai_configured,
            "text_model": self.text_model,
            "image_model": self.image_model,
            "usage_stats": await self.get_usage_statistics(),
        }


# Global service instance
google_ai_service = GoogleAIStudioService()
