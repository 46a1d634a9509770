"""Batch pipeline: parallel per-image analysis, then one claims guide."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Sequence

from config.settings import Settings
from models.vehicle_damage import AnalysisResult, DamageAnalysis, DamageReport, ImagePayload
from services.claims_guide import ClaimsGuideGenerator
from services.damage_analyzer import DamageAnalyzer
from services.gemini_client import GeminiClient
from services.structured_client import StructuredModelClient
from utils.errors import BatchAnalysisFailed
from utils.formatting import format_inr

logger = logging.getLogger(__name__)


def build_damage_summary(results: Sequence[AnalysisResult]) -> str:
    """
    Flatten all damages into "<severity> <damageType> on <location>" clauses joined by "; ".

    Returns an empty string when no image has any damage.
    """
    return "; ".join(
        damage.clause()
        for result in results
        for damage in result.analysis.damages
    )


class AnalysisOrchestrator:
    """Runs DamageAnalyzer over a batch of images and builds the full report."""

    def __init__(
        self,
        analyzer: DamageAnalyzer,
        claims_generator: ClaimsGuideGenerator,
        max_workers: int = 10,
    ):
        self.analyzer = analyzer
        self.claims_generator = claims_generator
        self.max_workers = max_workers

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisOrchestrator":
        """
        Wire the pipeline to Gemini.

        Raises:
            ConfigurationError: If the Gemini API key is not configured
        """
        analysis_client = StructuredModelClient(GeminiClient.for_analysis(settings))
        text_client = StructuredModelClient(GeminiClient.for_text(settings))
        return cls(
            analyzer=DamageAnalyzer(analysis_client),
            claims_generator=ClaimsGuideGenerator(text_client),
            max_workers=settings.analysis_max_workers,
        )

    def run(self, images: Sequence[ImagePayload]) -> DamageReport:
        """
        Analyze every image, then generate the claims guide exactly once.

        Args:
            images: Images in submission order

        Returns:
            DamageReport whose results follow the order of ``images``

        Raises:
            BatchAnalysisFailed: If any single image fails; no partial report is produced
            InvalidClaimsResponse: If the claims guide could not be parsed
            ModelUnavailable: If the claims guide request could not be sent
        """
        if not images:
            raise ValueError("At least one image is required")

        start_time = time.time()
        analyses = self._analyze_all(images)

        results = [
            AnalysisResult(image=image.name, analysis=analysis)
            for image, analysis in zip(images, analyses)
        ]
        summary = build_damage_summary(results)
        grand_total = sum(result.analysis.total_estimated_cost_inr for result in results)

        claims_information = self.claims_generator.generate(summary)

        logger.info(
            "Report ready: %d images, grand total %s in %.2fs",
            len(results),
            format_inr(grand_total),
            time.time() - start_time,
        )
        return DamageReport(
            results=results,
            claims_information=claims_information,
            damage_summary=summary,
            grand_total_inr=grand_total,
        )

    def _analyze_all(self, images: Sequence[ImagePayload]) -> list[DamageAnalysis]:
        """Fan out one analysis per image and join them back by input index."""
        analyses: list[Optional[DamageAnalysis]] = [None] * len(images)
        max_workers = max(1, min(self.max_workers, len(images)))

        # Leaving the executor waits for every started request before the error propagates.
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self.analyzer.analyze, image): index
                for index, image in enumerate(images)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    analyses[index] = future.result()
                except Exception as e:
                    for pending in futures:
                        pending.cancel()
                    logger.error("Analysis of image %d (%s) failed: %s", index, images[index].name, e)
                    raise BatchAnalysisFailed.from_image_failure(index, images[index].name, e) from e

        return analyses
