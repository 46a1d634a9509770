"""Models for vehicle damage analysis and the claims guide."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DamageType(str, Enum):
    """Closed set of damage categories the appraiser may report."""
    SCRATCH = "Scratch"
    DENT = "Dent"
    CRACK = "Crack"
    BROKEN_PART = "Broken Part"
    PAINT_DAMAGE = "Paint Damage"


class Severity(str, Enum):
    """Damage severity."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DamageDetail(BaseModel):
    """One located defect reported by the model."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, allow_inf_nan=False)

    damage_type: DamageType = Field(alias="damageType", description="Damage category")
    location: str = Field(
        min_length=1,
        description="Specific location (e.g., Lower right section of the front bumper)",
    )
    severity: Severity = Field(description="Severity based on size, depth and complexity")
    estimated_cost_inr: float = Field(
        alias="estimatedCostINR",
        ge=0,
        description="Repair cost estimate in Indian Rupees",
    )
    confidence_score: float = Field(
        alias="confidenceScore",
        ge=0.0,
        le=1.0,
        description="Confidence in this assessment (0.0-1.0)",
    )
    explanation: str = Field(min_length=1, description="Reasoning behind the assessment and estimate")

    def clause(self, location_article: str = "") -> str:
        """Short "<severity> <damageType> on <location>" description."""
        return f"{self.severity.value} {self.damage_type.value} on {location_article}{self.location}"


class DamageAnalysis(BaseModel):
    """Result of analyzing one image."""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    damages: list[DamageDetail] = Field(description="All distinct damages found; empty when none")
    total_estimated_cost_inr: float = Field(
        alias="totalEstimatedCostINR",
        ge=0,
        description="Sum of all individual estimated repair costs",
    )
    cost_factors: list[str] = Field(
        alias="costFactors",
        description="Most significant factors influencing the total cost",
    )

    def itemized_total(self) -> float:
        return sum(damage.estimated_cost_inr for damage in self.damages)

    def cost_mismatch(self, tolerance: float = 1.0) -> bool:
        """True when the reported total differs from the itemized sum by more than tolerance."""
        return abs(self.total_estimated_cost_inr - self.itemized_total()) > tolerance


@dataclass(frozen=True)
class ImagePayload:
    """Raw image bytes as submitted by the caller."""
    data: bytes = field(repr=False)
    mime_type: str
    name: str = "image"


class AnalysisResult(BaseModel):
    """Join of one submitted image with its analysis."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    image: str = Field(description="Reference to the submitted image (e.g., its filename)")
    analysis: DamageAnalysis

    @computed_field(alias="costMismatch")
    @property
    def cost_mismatch(self) -> bool:
        return self.analysis.cost_mismatch()


class EligibleClaim(BaseModel):
    """One claim the owner may file."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    claim_type: str = Field(alias="claimType", min_length=1, description="e.g., Own Damage Claim")
    description: str = Field(min_length=1, description="Relevance of the claim to the damages")


class ClaimsInformation(BaseModel):
    """Insurance claims guide derived from the combined damage summary."""
    model_config = ConfigDict(populate_by_name=True)

    eligible_claims: list[EligibleClaim] = Field(alias="eligibleClaims", min_length=1)
    claim_procedure: list[str] = Field(
        alias="claimProcedure",
        description="Ordered steps from notifying the insurer to final settlement",
    )
    required_documents: list[str] = Field(alias="requiredDocuments")


def no_damage_claims_guide() -> ClaimsInformation:
    """Fixed guide returned when no damage was detected in any image."""
    return ClaimsInformation(
        eligible_claims=[
            EligibleClaim(
                claim_type="No Claim Recommended",
                description=(
                    "No significant damage was detected that would typically "
                    "warrant an insurance claim."
                ),
            )
        ],
        claim_procedure=["No action is needed at this time."],
        required_documents=["None, as no claim is being filed."],
    )


class DamageReport(BaseModel):
    """Everything produced for one batch of images."""
    model_config = ConfigDict(populate_by_name=True)

    results: list[AnalysisResult] = Field(description="Per-image results in submission order")
    claims_information: ClaimsInformation = Field(alias="claimsInformation")
    damage_summary: str = Field(alias="damageSummary", description="Summary used for the claims guide")
    grand_total_inr: float = Field(alias="grandTotalINR", description="Sum of per-image totals")
