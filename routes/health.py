"""Health check routes."""

from fastapi import APIRouter, Depends

from config.settings import Settings, get_settings
from models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Check the health status of the application.

    Reports whether the Gemini API key is configured and which models are used.
    """
    gemini_configured = bool(settings.gemini_api_key)

    return HealthResponse(
        status="healthy" if gemini_configured else "degraded",
        gemini_configured=gemini_configured,
        analysis_model=settings.gemini_analysis_model,
        text_model=settings.gemini_text_model,
    )


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Vehicle Damage Assessment API",
        "version": "1.0.0",
        "description": "Vehicle damage assessment, claims guidance and report assistant using Gemini",
        "docs": "/docs",
        "health": "/health",
    }
