"""
Configuration settings for the Event Vision API
"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Event Vision API"
    version: str = "1.0.0"
    environment: str = "development"
    debug: bool = True

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Google AI Studio
    google_ai_api_key: str = ""
    google_ai_text_model: str = "gemini-2.5-flash"
    google_ai_image_model: str = "gemini-2.5-flash-image-preview"
    google_ai_temperature: float = 0.3
    google_ai_image_temperature: float = 0.4

    # File upload
    max_file_size: int = 20 * 1024 * 1024  # 20MB

    # Design sessions
    session_ttl_hours: int = 24

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_dir: str = "logs"
    log_max_bytes: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env


# Global settings instance
settings = Settings()
