"""
Configuration management for the trip planner.
Selects the record store backend (in-memory or hosted) and tunes view policies.
"""
from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Record Store Configuration
    record_store_backend: Literal["memory", "http"] = "memory"
    record_store_base_url: str = "http://localhost:8080/api/v1"
    record_store_api_key: Optional[str] = None
    record_store_project_id: Optional[str] = None
    record_store_timeout: float = 10.0
    
    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"
    
    # Boundary Validation
    max_field_length: int = 255
    cover_image_fallback_url: str = "https://images.unsplash.com/photo-1488646953014-85cb44e25828"
    
    # View Policies
    upcoming_activity_limit: int = 3
    default_event_duration_minutes: int = 60
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_record_store_config(config: Optional[Settings] = None) -> dict:
    """Get hosted record store connection settings."""
    config = config or settings
    headers = {"Accept": "application/json"}
    if config.record_store_api_key:
        headers["Authorization"] = f"Bearer {config.record_store_api_key}"
    if config.record_store_project_id:
        headers["X-Project-Id"] = config.record_store_project_id
    
    return {
        "base_url": config.record_store_base_url.rstrip("/"),
        "headers": headers,
        "timeout": config.record_store_timeout,
    }
