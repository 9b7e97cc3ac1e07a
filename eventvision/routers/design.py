"""
Event design API routes: sessions, uploads, blueprint review and rendering
"""
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile

from eventvision.core.config import settings
from eventvision.core.errors import GenerationError, MediaCodecError, MissingPromptError, NoImagesError
from eventvision.middleware.logging_middleware import get_logger
from eventvision.schemas.design import (
    BlueprintResponse,
    BlueprintUpdateRequest,
    DesignResultResponse,
    GeneratedImageSchema,
    GenerationResultResponse,
    LocationUpdateRequest,
    ProgressResponse,
    PromptRequest,
    SessionResponse,
    UploadResponse,
    WebsiteUpdateRequest,
    location_to_domain,
)
from eventvision.services.design_session import DesignSession, design_session_manager
from eventvision.services.event_design_pipeline import event_design_pipeline
from eventvision.services.google_ai_service import google_ai_service
from eventvision.services.media_codec import encode

logger = get_logger(__name__)
router = APIRouter(prefix="/design", tags=["design"])

SESSION_NOT_FOUND = "Design session not found"
SESSION_RESET = "The design session was reset while generating. Please start again."
UPLOAD_TOO_LARGE = "{name} exceeds the {limit_mb:g} MB upload limit."


def _get_session(session_id: str) -> DesignSession:
    try:
        return design_session_manager.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)


def _session_after_generation(session_id: str, session: DesignSession) -> DesignSession:
    """
    Re-check a session once a generation call returns.

    Raises:
        HTTPException: 404 if it was deleted or expired, 409 if it was reset
    """
    current = _get_session(session_id)
    if current is not session:
        logger.info("Session was reset during generation, discarding result")
        raise HTTPException(status_code=409, detail=SESSION_RESET)
    return current


def _generation_failed(error: GenerationError) -> HTTPException:
    status_code = 400 if isinstance(error, (NoImagesError, MissingPromptError)) else 502
    return HTTPException(status_code=status_code, detail=error.user_message)


def _progress_recorder(session_id: str):
    def on_progress(message: str) -> None:
        design_session_manager.record_progress(session_id, message)

    return on_progress


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session():
    """Start a new design session"""
    design_session_manager.cleanup_expired_sessions()
    session = design_session_manager.create_session()
    return SessionResponse.from_session(session)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return SessionResponse.from_session(_get_session(session_id))


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not design_session_manager.clear_session(session_id):
        raise HTTPException(status_code=404, detail=SESSION_NOT_FOUND)
    return {"session_id": session_id, "deleted": True}


@router.post("/sessions/{session_id}/reset", response_model=SessionResponse)
async def reset_session(session_id: str):
    """Start over: drop uploads, location, website, blueprint and renders"""
    _get_session(session_id)
    return SessionResponse.from_session(design_session_manager.reset_session(session_id))


@router.post("/sessions/{session_id}/media", response_model=UploadResponse)
async def upload_media(session_id: str, files: List[UploadFile] = File(...)):
    """Upload venue photos and videos. Other file types are skipped."""
    _get_session(session_id)

    assets = []
    skipped = []
    for upload in files:
        raw = await upload.read()
        name = upload.filename or "upload"
        if len(raw) > settings.max_file_size:
            limit_mb = settings.max_file_size / (1024 * 1024)
            raise HTTPException(status_code=413, detail=UPLOAD_TOO_LARGE.format(name=name, limit_mb=limit_mb))
        try:
            assets.append(encode(raw, upload.content_type, name))
        except MediaCodecError:
            logger.info(f"Skipping non-media upload {name} ({upload.content_type})")
            skipped.append(name)

    if not assets:
        raise HTTPException(status_code=400, detail="Please upload venue images or videos.")

    session = design_session_manager.add_media(session_id, assets)
    logger.info(f"Added {len(assets)} upload(s), session now holds {len(session.media)}")
    return UploadResponse(**SessionResponse.from_session(session).model_dump(), skipped_files=skipped)


@router.delete("/sessions/{session_id}/media/{index}", response_model=SessionResponse)
async def remove_media(session_id: str, index: int):
    _get_session(session_id)
    try:
        session = design_session_manager.remove_media(session_id, index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"No upload at position {index}")
    return SessionResponse.from_session(session)


@router.put("/sessions/{session_id}/location", response_model=SessionResponse)
async def set_location(session_id: str, request: LocationUpdateRequest):
    _get_session(session_id)
    session = design_session_manager.set_location(session_id, location_to_domain(request.location))
    return SessionResponse.from_session(session)


@router.delete("/sessions/{session_id}/location", response_model=SessionResponse)
async def clear_location(session_id: str):
    _get_session(session_id)
    return SessionResponse.from_session(design_session_manager.clear_location(session_id))


@router.put("/sessions/{session_id}/website", response_model=SessionResponse)
async def set_website(session_id: str, request: WebsiteUpdateRequest):
    _get_session(session_id)
    return SessionResponse.from_session(design_session_manager.set_website(session_id, request.website))


@router.post("/sessions/{session_id}/blueprint", response_model=BlueprintResponse)
async def build_blueprint(session_id: str, request: PromptRequest):
    """Analyze the venue and produce a blueprint for review"""
    session = _get_session(session_id)
    logger.info(f"Building blueprint from {len(session.media)} upload(s)")

    try:
        blueprint = await event_design_pipeline.build_blueprint(
            list(session.media),
            request.prompt,
            session.location,
            session.website,
            _progress_recorder(session_id),
        )
    except GenerationError as e:
        logger.warning(f"Blueprint stage failed: {e.__cause__ or e}")
        raise _generation_failed(e)

    _session_after_generation(session_id, session)
    design_session_manager.store_blueprint(session_id, blueprint, request.prompt)
    return BlueprintResponse.from_blueprint(session_id, blueprint)


@router.put("/sessions/{session_id}/blueprint", response_model=BlueprintResponse)
async def update_blueprint(session_id: str, request: BlueprintUpdateRequest):
    """Save the reviewed blueprint text"""
    _get_session(session_id)
    try:
        session = design_session_manager.update_blueprint_text(session_id, request.text)
    except LookupError:
        raise HTTPException(status_code=409, detail="Generate a blueprint before editing it")
    return BlueprintResponse.from_blueprint(session_id, session.blueprint)


@router.post("/sessions/{session_id}/render", response_model=GenerationResultResponse)
async def render_views(session_id: str):
    """Render the floor plan and event views from the (reviewed) blueprint"""
    session = _get_session(session_id)
    if session.blueprint is None:
        raise HTTPException(status_code=409, detail="Generate a blueprint before rendering")

    try:
        views = await event_design_pipeline.render(session.blueprint, _progress_recorder(session_id))
    except GenerationError as e:
        raise _generation_failed(e)

    _session_after_generation(session_id, session)
    design_session_manager.store_views(session_id, views)
    return GenerationResultResponse(session_id=session_id, images=[GeneratedImageSchema.from_view(v) for v in views])


@router.post("/sessions/{session_id}/generate", response_model=DesignResultResponse)
async def generate_design(session_id: str, request: PromptRequest):
    """Blueprint and renders in one step, without review"""
    session = _get_session(session_id)
    logger.info(f"Direct generation from {len(session.media)} upload(s)")

    try:
        result = await event_design_pipeline.generate(
            list(session.media),
            request.prompt,
            session.location,
            session.website,
            _progress_recorder(session_id),
        )
    except GenerationError as e:
        logger.warning(f"Generation failed: {e.__cause__ or e}")
        raise _generation_failed(e)

    _session_after_generation(session_id, session)
    design_session_manager.store_blueprint(session_id, result.blueprint, request.prompt)
    design_session_manager.store_views(session_id, result.views)
    return DesignResultResponse(
        session_id=session_id,
        images=[GeneratedImageSchema.from_view(v) for v in result.views],
        blueprint=result.blueprint.text,
        analysis_summary=result.blueprint.analysis_summary,
    )


@router.get("/sessions/{session_id}/progress", response_model=ProgressResponse)
async def get_progress(session_id: str):
    session = _get_session(session_id)
    return ProgressResponse(session_id=session_id, message=session.progress_message)


@router.get("/health")
async def health_check():
    """Google AI configuration and usage"""
    return await google_ai_service.health_check()
