"""Per-image damage analysis."""

import logging

from models.vehicle_damage import DamageAnalysis, ImagePayload
from prompts.vehicle_damage import get_damage_analysis_prompt
from services.structured_client import StructuredModelClient
from utils.errors import InvalidAnalysisResponse, ModelResponseInvalid
from utils.formatting import format_inr

logger = logging.getLogger(__name__)


class DamageAnalyzer:
    """Analyzes one vehicle image with exactly one model call."""

    def __init__(self, client: StructuredModelClient):
        self.client = client

    def analyze(self, image: ImagePayload) -> DamageAnalysis:
        """
        Identify and cost all visible damage in an image.

        The reported total is accepted as returned; a difference from the
        itemized sum is logged as a warning and left for the caller to flag.

        Args:
            image: Image bytes and MIME type

        Returns:
            DamageAnalysis for the image

        Raises:
            InvalidAnalysisResponse: If the model output does not match the schema
            ModelUnavailable: If the model service could not be reached
        """
        try:
            analysis = self.client.request(
                get_damage_analysis_prompt(),
                DamageAnalysis,
                image=image,
            )
        except ModelResponseInvalid as e:
            raise InvalidAnalysisResponse.wrap(e) from e

        if analysis.cost_mismatch():
            logger.warning(
                "Reported total INR %.2f for %s differs from itemized sum INR %.2f",
                analysis.total_estimated_cost_inr,
                image.name,
                analysis.itemized_total(),
            )

        logger.info(
            "Analyzed %s: %d damages, total %s",
            image.name,
            len(analysis.damages),
            format_inr(analysis.total_estimated_cost_inr),
        )
        return analysis
