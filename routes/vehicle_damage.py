"""Routes for vehicle damage analysis."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from config.settings import Settings, get_settings
from middleware.auth import verify_api_key
from models import DamageReport
from routes.errors import to_http_exception
from services import AnalysisOrchestrator, load_image_payload
from utils.errors import ConfigurationError, VehicleDamageError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/vehicle-damage",
    tags=["Vehicle Damage Analysis"],
    dependencies=[Depends(verify_api_key)]
)


def get_orchestrator(settings: Settings = Depends(get_settings)) -> AnalysisOrchestrator:
    """Create the analysis pipeline for a request."""
    try:
        return AnalysisOrchestrator.from_settings(settings)
    except ConfigurationError as e:
        raise to_http_exception(e)


@router.post("/analyze", response_model=DamageReport)
async def analyze_vehicle_damage(
    files: list[UploadFile] = File(..., description="Vehicle photographs"),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
):
    """
    Analyze vehicle photographs and build the damage report.

    Every image is analyzed in parallel, then one claims guide is generated
    from the combined damage summary.

    Returns:
        DamageReport with per-image results (in upload order), the claims
        guide, the damage summary and the grand total in INR.

    If any image fails, no partial report is returned.
    """
    if not files:
        raise HTTPException(status_code=400, detail="At least one image must be provided")
    if len(files) > settings.max_images_per_report:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_images_per_report} images can be analyzed at once"
        )

    try:
        images = []
        for index, upload in enumerate(files):
            data = await upload.read()
            images.append(load_image_payload(
                data,
                filename=upload.filename or f"image-{index + 1}",
                content_type=upload.content_type,
                max_bytes=settings.max_image_bytes,
            ))

        return await run_in_threadpool(orchestrator.run, images)
    except VehicleDamageError as e:
        logger.warning("Analysis request failed: %s", e.to_dict())
        raise to_http_exception(e)
