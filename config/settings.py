from functools import lru_cache
from pathlib import Path
from typing import Optional
import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Gemini API Configuration
    gemini_api_key: str = ""
    gemini_analysis_model: str = "gemini-3-pro-preview"
    gemini_text_model: str = "gemini-3-flash-preview"
    gemini_temperature: float = 1.0
    gemini_media_resolution: str = "MEDIA_RESOLUTION_HIGH"
    gemini_timeout: Optional[float] = None
    gemini_max_retries: int = 0

    # Analysis pipeline
    analysis_max_workers: int = 10
    max_images_per_report: int = 10
    max_image_bytes: int = 10 * 1024 * 1024

    # Report assistant sessions
    chat_max_sessions: int = 1000
    chat_session_ttl_seconds: Optional[float] = 3600.0

    # API authentication
    api_key: str = ""
    encryption_key: str = ""

    # Application Configuration
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[Path] = None

    # Langsmith tracing
    langsmith_tracing: Optional[bool] = False
    langsmith_endpoint: Optional[str] = "https://api.smith.langchain.com"
    langsmith_api_key: Optional[str] = ""
    langsmith_project: Optional[str] = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def configure_tracing(self) -> bool:
        """Export LangSmith settings to the environment when tracing is enabled."""
        if not (self.langsmith_tracing and self.langsmith_api_key):
            return False
        os.environ['LANGSMITH_TRACING'] = 'true'
        os.environ['LANGSMITH_ENDPOINT'] = self.langsmith_endpoint or ''
        os.environ['LANGSMITH_API_KEY'] = self.langsmith_api_key
        os.environ['LANGSMITH_PROJECT'] = self.langsmith_project or 'default'
        return True


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()


settings = get_settings()
