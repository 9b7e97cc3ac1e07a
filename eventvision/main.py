"""
FastAPI main application for Event Vision
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from eventvision import __version__
from eventvision.core.config import settings
from eventvision.core.logging import setup_logging
from eventvision.middleware import RequestLoggingMiddleware
from eventvision.routers import design

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Event Vision API...")

    google_key = settings.google_ai_api_key
    if google_key:
        key_preview = f"{google_key[:7]}...{google_key[-4:]}" if len(google_key) > 11 else "***"
        logger.info(f"GOOGLE_AI_API_KEY is set: {key_preview}")
    else:
        logger.error("GOOGLE_AI_API_KEY is NOT set - blueprints will fail and renders will be placeholders")

    yield

    logger.info("Shutting down Event Vision API...")


app = FastAPI(
    title=settings.app_name,
    description="Turns venue photos and an event vision into a blueprint, floor plan and event renders",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers"""
    return {"status": "healthy", "timestamp": time.time(), "version": __version__}


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.environment == "development" else None,
        "endpoints": {"design": "/api/design"},
    }


app.include_router(design.router, prefix="/api")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "eventvision.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_config=None,
        access_log=False,
    )
