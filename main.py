"""FastAPI application for vehicle damage assessment using Gemini API."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from routes import health_router, vehicle_damage_router, chat_router
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Vehicle Damage Assessment API",
    description="Per-image damage assessment, insurance claims guidance and a report assistant using Gemini",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(vehicle_damage_router)
app.include_router(chat_router)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )

    # Log configuration status
    if settings.gemini_api_key:
        logger.info("Gemini API key configured")
    else:
        logger.warning("GEMINI_API_KEY not set; analysis requests will fail")

    if not (settings.api_key and settings.encryption_key):
        logger.warning("API_KEY / ENCRYPTION_KEY not set; authenticated routes will reject requests")

    if settings.configure_tracing():
        logger.info("LangSmith tracing enabled for project %s", settings.langsmith_project or "default")

    logger.info("Analysis model: %s", settings.gemini_analysis_model)
    logger.info("Text model: %s", settings.gemini_text_model)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
    )
