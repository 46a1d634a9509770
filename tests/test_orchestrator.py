"""Tests for the batch analysis pipeline."""

import json
import threading

import pytest

from models.vehicle_damage import AnalysisResult, DamageAnalysis, ImagePayload, no_damage_claims_guide
from services.claims_guide import ClaimsGuideGenerator
from services.damage_analyzer import DamageAnalyzer
from services.orchestrator import AnalysisOrchestrator, build_damage_summary
from services.structured_client import StructuredModelClient
from tests.fakes import FakeModelService, make_analysis, make_claims, make_damage, make_image
from utils.errors import BatchAnalysisFailed, ErrorType, InvalidAnalysisResponse, ModelUnavailable


def _orchestrator(analysis_service, claims_service, max_workers=10):
    return AnalysisOrchestrator(
        analyzer=DamageAnalyzer(StructuredModelClient(analysis_service)),
        claims_generator=ClaimsGuideGenerator(StructuredModelClient(claims_service)),
        max_workers=max_workers,
    )


def _by_name(payloads):
    """Handler answering each image with the payload registered under its name."""
    def handler(prompt, schema, image):
        return json.dumps(payloads[image.name])
    return handler


def test_results_follow_input_order_regardless_of_completion_order():
    payloads = {
        "A": make_analysis([make_damage(location="hood", cost=100)]),
        "B": make_analysis([make_damage(location="door", cost=200)]),
        "C": make_analysis([make_damage(location="trunk", cost=300)]),
    }
    b_done = threading.Event()
    completion = []

    def handler(prompt, schema, image):
        if image.name != "B":
            assert b_done.wait(timeout=5)
        completion.append(image.name)
        if image.name == "B":
            b_done.set()
        return json.dumps(payloads[image.name])

    claims_service = FakeModelService(responses=[make_claims()])
    orchestrator = _orchestrator(FakeModelService(handler=handler), claims_service)

    report = orchestrator.run([make_image("A"), make_image("B"), make_image("C")])

    assert completion[0] == "B"
    assert [r.image for r in report.results] == ["A", "B", "C"]
    assert [r.analysis.damages[0].location for r in report.results] == ["hood", "door", "trunk"]


def test_analyses_run_concurrently():
    barrier = threading.Barrier(3, timeout=5)

    def handler(prompt, schema, image):
        barrier.wait()
        return json.dumps(make_analysis())

    orchestrator = _orchestrator(FakeModelService(handler=handler), FakeModelService(responses=[]))

    report = orchestrator.run([make_image("1"), make_image("2"), make_image("3")])

    assert len(report.results) == 3


def test_grand_total_sums_per_image_totals():
    payloads = {
        "front": make_analysis([make_damage(cost=1500)]),
        "rear": make_analysis([make_damage(cost=2000), make_damage(severity="Low", cost=300)]),
    }
    orchestrator = _orchestrator(
        FakeModelService(handler=_by_name(payloads)),
        FakeModelService(responses=[make_claims()]),
    )

    report = orchestrator.run([make_image("front"), make_image("rear")])

    assert [r.analysis.total_estimated_cost_inr for r in report.results] == [1500, 2300]
    assert report.grand_total_inr == 3800


def test_grand_total_uses_reported_totals_even_when_they_disagree():
    payloads = {"x": make_analysis([make_damage(cost=100)], total=250)}
    orchestrator = _orchestrator(
        FakeModelService(handler=_by_name(payloads)),
        FakeModelService(responses=[make_claims()]),
    )

    report = orchestrator.run([make_image("x")])

    assert report.grand_total_inr == 250
    assert report.results[0].cost_mismatch is True


def test_summary_drives_exactly_one_claims_call():
    payloads = {
        "one": make_analysis([make_damage(severity="High", damage_type="Dent", location="front bumper")]),
        "two": make_analysis([]),
    }
    claims_service = FakeModelService(responses=[make_claims()])
    orchestrator = _orchestrator(FakeModelService(handler=_by_name(payloads)), claims_service)

    report = orchestrator.run([make_image("one"), make_image("two")])

    assert report.damage_summary == "High Dent on front bumper"
    assert len(claims_service.calls) == 1
    assert "High Dent on front bumper" in claims_service.calls[0]["prompt"]
    assert report.claims_information.eligible_claims[0].claim_type == "Own Damage Claim"


def test_no_damage_anywhere_uses_fallback_guide_without_claims_call():
    analysis_service = FakeModelService(handler=lambda prompt, schema, image: json.dumps(make_analysis()))
    claims_service = FakeModelService(responses=[])
    orchestrator = _orchestrator(analysis_service, claims_service)

    report = orchestrator.run([make_image("a"), make_image("b")])

    assert report.damage_summary == ""
    assert claims_service.calls == []
    assert report.claims_information == no_damage_claims_guide()
    assert report.grand_total_inr == 0


def test_one_failing_image_fails_the_whole_batch():
    def handler(prompt, schema, image):
        if image.name == "B":
            return "Sorry, I cannot see a car here."
        return json.dumps(make_analysis([make_damage()]))

    analysis_service = FakeModelService(handler=handler)
    claims_service = FakeModelService(responses=[make_claims()])
    orchestrator = _orchestrator(analysis_service, claims_service)

    with pytest.raises(BatchAnalysisFailed) as exc_info:
        orchestrator.run([make_image("A"), make_image("B"), make_image("C")])

    error = exc_info.value
    assert error.image_index == 1
    assert error.context.details["image"] == "B"
    assert isinstance(error.cause, InvalidAnalysisResponse)
    assert "clearer images" in error.message
    assert claims_service.calls == []


def test_unavailable_model_during_batch_is_reported_as_recoverable():
    error = ModelUnavailable.from_exception(ConnectionError("down"), "test")
    orchestrator = _orchestrator(
        FakeModelService(handler=lambda prompt, schema, image: error),
        FakeModelService(responses=[]),
    )

    with pytest.raises(BatchAnalysisFailed) as exc_info:
        orchestrator.run([make_image("only")])

    assert exc_info.value.context.error_type is ErrorType.BATCH_ANALYSIS_FAILED
    assert exc_info.value.context.recoverable
    assert exc_info.value.context.details["cause"] == ErrorType.MODEL_UNAVAILABLE.value


def test_empty_batch_is_rejected():
    orchestrator = _orchestrator(FakeModelService(responses=[]), FakeModelService(responses=[]))

    with pytest.raises(ValueError):
        orchestrator.run([])


def test_build_damage_summary_joins_clauses_across_images():
    results = [
        AnalysisResult(
            image="a",
            analysis=DamageAnalysis.model_validate(make_analysis([
                make_damage(severity="High", damage_type="Dent", location="front bumper"),
                make_damage(severity="Low", damage_type="Scratch", location="left mirror"),
            ])),
        ),
        AnalysisResult(image="b", analysis=DamageAnalysis.model_validate(make_analysis([]))),
        AnalysisResult(
            image="c",
            analysis=DamageAnalysis.model_validate(make_analysis([
                make_damage(severity="Medium", damage_type="Broken Part", location="tail light"),
            ])),
        ),
    ]

    assert build_damage_summary(results) == (
        "High Dent on front bumper; Low Scratch on left mirror; Medium Broken Part on tail light"
    )


def test_image_payload_repr_hides_bytes():
    assert "data" not in repr(ImagePayload(data=b"\x00" * 10, mime_type="image/png", name="x.png"))
