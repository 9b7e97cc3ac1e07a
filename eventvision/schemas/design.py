"""
Pydantic schemas for event design API endpoints
"""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from eventvision.services.design_models import Address, Blueprint, Coordinates, Location, MediaAsset, RenderedView
from eventvision.services.design_session import DesignSession


class AddressLocation(BaseModel):
    """Free-form venue address"""

    kind: Literal["address"] = "address"
    address: str = Field(..., min_length=1, description="Venue address or place name")


class CoordinatesLocation(BaseModel):
    """Device geolocation"""

    kind: Literal["coordinates"] = "coordinates"
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


LocationSchema = Annotated[Union[AddressLocation, CoordinatesLocation], Field(discriminator="kind")]


def location_to_domain(location: Union[AddressLocation, CoordinatesLocation]) -> Location:
    if isinstance(location, CoordinatesLocation):
        return Coordinates(latitude=location.latitude, longitude=location.longitude)
    return Address(address=location.address.strip())


def location_from_domain(location: Optional[Location]) -> Optional[Union[AddressLocation, CoordinatesLocation]]:
    if location is None:
        return None
    if isinstance(location, Coordinates):
        return CoordinatesLocation(latitude=location.latitude, longitude=location.longitude)
    return AddressLocation(address=location.address)


class LocationUpdateRequest(BaseModel):
    location: LocationSchema


class WebsiteUpdateRequest(BaseModel):
    website: str = Field(default="", description="Venue website URL")


class PromptRequest(BaseModel):
    prompt: str = Field(..., description="Event vision, e.g. 'Garden wedding for 150 guests with string lights'")


class BlueprintUpdateRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Reviewed blueprint text")


class MediaAssetSummary(BaseModel):
    index: int
    name: str
    mime_type: str
    kind: str


class MediaAssetPreview(BaseModel):
    name: str
    mime_type: str
    kind: str
    data_url: str

    @classmethod
    def from_asset(cls, asset: MediaAsset) -> "MediaAssetPreview":
        return cls(name=asset.name, mime_type=asset.mime_type, kind=asset.kind.value, data_url=asset.payload)


class SessionResponse(BaseModel):
    session_id: str
    media: List[MediaAssetSummary] = Field(default_factory=list)
    location: Optional[LocationSchema] = None
    website: str = ""
    prompt: str = ""
    has_blueprint: bool = False
    has_views: bool = False
    progress_message: str = ""
    last_updated: datetime

    @classmethod
    def from_session(cls, session: DesignSession) -> "SessionResponse":
        return cls(
            session_id=session.session_id,
            media=[
                MediaAssetSummary(index=index, name=asset.name, mime_type=asset.mime_type, kind=asset.kind.value)
                for index, asset in enumerate(session.media)
            ],
            location=location_from_domain(session.location),
            website=session.website,
            prompt=session.prompt,
            has_blueprint=session.blueprint is not None,
            has_views=bool(session.views),
            progress_message=session.progress_message,
            last_updated=session.last_updated,
        )


class UploadResponse(SessionResponse):
    skipped_files: List[str] = Field(default_factory=list, description="Uploads that were not images or videos")


class BlueprintResponse(BaseModel):
    session_id: str
    blueprint: str
    analysis_summary: str
    cleaned_files: List[MediaAssetPreview] = Field(default_factory=list)

    @classmethod
    def from_blueprint(cls, session_id: str, blueprint: Blueprint) -> "BlueprintResponse":
        return cls(
            session_id=session_id,
            blueprint=blueprint.text,
            analysis_summary=blueprint.analysis_summary,
            cleaned_files=[MediaAssetPreview.from_asset(asset) for asset in blueprint.cleaned_assets],
        )


class GeneratedImageSchema(BaseModel):
    label: str = Field(..., description="Floor Plan, Main Event Space or Side View")
    image_url: str = Field(..., description="Self-contained data URI")
    description: str
    is_fallback: bool = False

    @classmethod
    def from_view(cls, view: RenderedView) -> "GeneratedImageSchema":
        return cls(label=view.label, image_url=view.image_data, description=view.description, is_fallback=view.is_fallback)


class GenerationResultResponse(BaseModel):
    session_id: str
    images: List[GeneratedImageSchema]


class DesignResultResponse(GenerationResultResponse):
    blueprint: str
    analysis_summary: str


class ProgressResponse(BaseModel):
    session_id: str
    message: str
