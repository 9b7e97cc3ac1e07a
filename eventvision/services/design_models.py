"""
Data model shared by the event design services
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple, Union

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class MediaKind(str, Enum):
    """Top-level media type of an upload"""

    image = "image"
    video = "video"


@dataclass(frozen=True)
class MediaAsset:
    """One uploaded file, kept as a data URL"""

    payload: str  # "data:<mime>;base64,<data>"
    mime_type: str
    kind: MediaKind
    name: str


@dataclass(frozen=True)
class Address:
    """Free-form venue location"""

    address: str

    def describe(self) -> str:
        return self.address


@dataclass(frozen=True)
class Coordinates:
    """Venue location from device geolocation"""

    latitude: float
    longitude: float

    def describe(self) -> str:
        return f"{self.latitude}, {self.longitude}"


Location = Union[Address, Coordinates]


@dataclass(frozen=True)
class Blueprint:
    """Venue/event analysis produced by the text model, consumed by the renderer"""

    text: str
    original_assets: Tuple[MediaAsset, ...]
    cleaned_assets: Tuple[MediaAsset, ...]
    analysis_summary: str

    def with_text(self, text: str) -> "Blueprint":
        """Return a copy carrying reviewed/edited blueprint text"""
        return replace(self, text=text)


@dataclass(frozen=True)
class ViewSpec:
    """One of the fixed output views and its instruction template"""

    label: str
    prompt_template: str

    def build_prompt(self, blueprint_text: str) -> str:
        return self.prompt_template.format(blueprint=blueprint_text)


@dataclass(frozen=True)
class RenderedView:
    """A labeled image (data URI) for one view"""

    image_data: str
    description: str
    label: str
    is_fallback: bool = False


def report_progress(on_progress: Optional[ProgressCallback], message: str) -> None:
    """Send a status line to the caller. Progress is advisory, a broken sink never stops generation."""
    logger.debug(f"Progress: {message}")
    if on_progress is None:
        return
    try:
        on_progress(message)
    except Exception as e:
        logger.warning(f"Progress callback failed: {e}")
