"""Insurance claims guide generation."""

import logging

from models.vehicle_damage import ClaimsInformation, no_damage_claims_guide
from prompts.vehicle_damage import get_claims_guide_prompt
from services.structured_client import StructuredModelClient
from utils.errors import InvalidClaimsResponse, ModelResponseInvalid

logger = logging.getLogger(__name__)


class ClaimsGuideGenerator:
    """Turns a damage summary into a claims guide."""

    def __init__(self, client: StructuredModelClient):
        self.client = client

    def generate(self, summary: str) -> ClaimsInformation:
        """
        Generate the claims guide for a damage summary.

        A blank summary means no damage was found anywhere, and the fixed
        "No Claim Recommended" guide is returned without calling the model.

        Raises:
            InvalidClaimsResponse: If the model output does not match the schema
            ModelUnavailable: If the model service could not be reached
        """
        if not summary or not summary.strip():
            logger.info("No damage detected; returning the no-claim guide")
            return no_damage_claims_guide()

        try:
            claims = self.client.request(get_claims_guide_prompt(summary), ClaimsInformation)
        except ModelResponseInvalid as e:
            raise InvalidClaimsResponse.wrap(e) from e

        logger.info(
            "Generated claims guide: %d eligible claims, %d steps, %d documents",
            len(claims.eligible_claims),
            len(claims.claim_procedure),
            len(claims.required_documents),
        )
        return claims
