"""
Media codec: uploaded files <-> data URL payloads
"""
import base64
import io
import logging
import mimetypes
from typing import Optional

from PIL import Image, UnidentifiedImageError

from eventvision.core.errors import MediaCodecError
from eventvision.services.design_models import MediaAsset, MediaKind

logger = logging.getLogger(__name__)

# MIME types the image generation model accepts as input
SUPPORTED_IMAGE_MIME_TYPES = (
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/heic",
    "image/heif",
)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Wrap raw bytes into a self-describing data URL"""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('utf-8')}"


def strip_data_url(payload: str) -> str:
    """Remove the ``data:<mime>;base64,`` prefix if present"""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def is_media_type(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.split("/")[0].lower() in ("image", "video")


def is_supported_image(asset: MediaAsset) -> bool:
    return asset.mime_type in SUPPORTED_IMAGE_MIME_TYPES


def media_kind(mime_type: str) -> MediaKind:
    top_level = mime_type.split("/")[0].lower()
    if top_level == "image":
        return MediaKind.image
    if top_level == "video":
        return MediaKind.video
    raise MediaCodecError(f"Unsupported media type: {mime_type}")


def detect_mime_type(raw: bytes, declared: Optional[str] = None, name: str = "") -> str:
    """
    Resolve the MIME type of an upload.

    The declared content type wins when it is already image/* or video/*.
    Otherwise the bytes are sniffed with Pillow, then the file name is consulted.
    """
    if is_media_type(declared):
        return declared.lower()

    try:
        with Image.open(io.BytesIO(raw)) as image:
            sniffed = Image.MIME.get(image.format or "")
        if sniffed:
            return sniffed
    except (UnidentifiedImageError, OSError):
        logger.debug(f"Pillow could not identify {name or 'upload'}, falling back to file name")

    guessed, _ = mimetypes.guess_type(name)
    return guessed or declared or "application/octet-stream"


def encode(raw: bytes, mime_type: Optional[str] = None, name: str = "upload") -> MediaAsset:
    """
    Turn raw file bytes into a MediaAsset.

    Raises:
        MediaCodecError: if the file is neither an image nor a video
    """
    resolved = detect_mime_type(raw, mime_type, name)
    kind = media_kind(resolved)
    return MediaAsset(payload=to_data_url(raw, resolved), mime_type=resolved, kind=kind, name=name)


def strip(asset: MediaAsset) -> str:
    """Base64 payload of an asset without its data URL prefix"""
    return strip_data_url(asset.payload)


def decode(asset: MediaAsset) -> bytes:
    """Raw bytes of an asset"""
    return base64.b64decode(strip(asset))
