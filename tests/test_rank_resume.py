"""Tests for the résumé ranking flow."""

from __future__ import annotations

import asyncio
import json

import pytest  # type: ignore

from conftest import make_response
from resumeflow.errors import ParseError, RankingError, ServiceError
from resumeflow.flows.rank_resume import RankResumeInput, build_ranking_prompt, rank_resume_flow
from resumeflow.flows.schemas import RANKING_RESPONSE_SCHEMA, RankingResult
from resumeflow.genai.content import InlineMedia, TextPart

GOOD_PAYLOAD = {
    "match_score": 72,
    "strengths": "Solid Python and payments experience.",
    "weaknesses": "Little evidence of distributed systems work.",
    "keywords_missing": ["Kafka", "PCI DSS"],
    "final_recommendation": "Quantify the impact of the payment gateway migration.",
}

LONG_JD = (
    "We are hiring a Backend Engineer to build ledger services in Go and Postgres. "
    "You will own reconciliation pipelines and on-call rotations."
)


def _input(pdf_base64: str, job_description: str | None = None) -> RankResumeInput:
    return RankResumeInput(
        pdf_base64=pdf_base64,
        job_role="Backend Engineer",
        field="Fintech",
        job_description=job_description,
    )


def test_prompt_without_job_description_has_no_directive(pdf_base64: str) -> None:
    text_part, media = build_ranking_prompt(_input(pdf_base64))
    assert isinstance(text_part, TextPart)
    assert "CRITICAL INSTRUCTION" not in text_part.text
    assert media == InlineMedia(mime_type="application/pdf", data=pdf_base64)


def test_prompt_with_long_job_description_has_directive(pdf_base64: str) -> None:
    text_part, _ = build_ranking_prompt(_input(pdf_base64, LONG_JD))
    assert "CRITICAL INSTRUCTION" in text_part.text
    assert LONG_JD in text_part.text
    assert 'about the role "Backend Engineer"' in text_part.text


def test_prompt_ignores_short_job_description(pdf_base64: str) -> None:
    text_part, _ = build_ranking_prompt(_input(pdf_base64, "Python dev"))
    assert "CRITICAL INSTRUCTION" not in text_part.text


def test_rank_resume_end_to_end(make_client, pdf_base64: str) -> None:
    client, sdk = make_client(make_response("```json\n" + json.dumps(GOOD_PAYLOAD) + "\n```"))
    result = asyncio.run(rank_resume_flow(client, _input(pdf_base64)))

    assert 0 <= result.match_score <= 100
    assert result.strengths and result.weaknesses and result.recommendation
    assert result.missing_keywords == ["Kafka", "PCI DSS"]

    call = sdk.models.calls[0]
    assert call["model"] == "pro-test"
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].response_schema is not None
    parts = call["contents"][0].parts
    assert parts[1].inline_data.mime_type == "application/pdf"


def test_rank_resume_parse_failure_is_chained(make_client, pdf_base64: str) -> None:
    client, _ = make_client(make_response("not json at all"))
    with pytest.raises(RankingError) as excinfo:
        asyncio.run(rank_resume_flow(client, _input(pdf_base64)))
    assert "Ensure the PDF is valid" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ParseError)
    assert excinfo.value.__cause__.raw_text == "not json at all"


def test_rank_resume_service_failure_is_chained(make_client, pdf_base64: str) -> None:
    client, _ = make_client(ConnectionError("reset"))
    with pytest.raises(RankingError) as excinfo:
        asyncio.run(rank_resume_flow(client, _input(pdf_base64)))
    assert isinstance(excinfo.value.__cause__, ServiceError)


def test_rank_resume_missing_keys(make_client, pdf_base64: str) -> None:
    client, _ = make_client(make_response(json.dumps({"match_score": 50})))
    with pytest.raises(RankingError) as excinfo:
        asyncio.run(rank_resume_flow(client, _input(pdf_base64)))
    assert isinstance(excinfo.value.__cause__, ParseError)


def test_ranking_result_does_not_clamp_score() -> None:
    result = RankingResult.from_payload(dict(GOOD_PAYLOAD, match_score=140))
    assert result.match_score == 140


def test_ranking_result_round_trips_wire_names() -> None:
    assert RankingResult.from_payload(GOOD_PAYLOAD).to_payload() == GOOD_PAYLOAD


def test_ranking_result_rejects_non_list_keywords() -> None:
    with pytest.raises(ParseError):
        RankingResult.from_payload(dict(GOOD_PAYLOAD, keywords_missing="Kafka"))


def test_schema_requires_every_field() -> None:
    assert set(RANKING_RESPONSE_SCHEMA["required"]) == set(GOOD_PAYLOAD)
