"""Tests for the résumé roast flow."""

from __future__ import annotations

import asyncio
import base64
import json

import pytest  # type: ignore

from conftest import FakeTTS, make_response
from resumeflow.errors import ParseError, RoastError, ServiceError
from resumeflow.flows.roast_resume import RoastResumeInput, build_roast_prompt, roast_resume_flow
from resumeflow.flows.schemas import RoastResult
from resumeflow.genai.speech import SpeechSynthesizer

ROAST = {
    "roast_comments": [
        "Your résumé lists 'Microsoft Word' as a core skill. Bold move.",
        "Four bullet points saying 'team player' is not a team.",
    ],
    "improvement_tips": ["Quantify your impact.", "Cut the skills list to what you can defend."],
}


def test_roast_prompt_mentions_role_and_field(pdf_base64: str) -> None:
    text_part, media = build_roast_prompt(RoastResumeInput(pdf_base64=pdf_base64, job_role="SRE", field="Cloud"))
    assert "SRE" in text_part.text
    assert "Cloud" in text_part.text
    assert media.mime_type == "application/pdf"


def test_roast_prompt_defaults(pdf_base64: str) -> None:
    text_part, _ = build_roast_prompt(RoastResumeInput(pdf_base64=pdf_base64))
    assert "Target Role" in text_part.text
    assert "General" in text_part.text
    assert "{{" not in text_part.text


def test_roast_returns_structured_lists(make_client, pdf_base64: str) -> None:
    client, sdk = make_client(make_response("```json\n" + json.dumps(ROAST) + "\n```"))
    result = asyncio.run(roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64)))
    assert result.roast_comments == ROAST["roast_comments"]
    assert result.improvement_tips == ROAST["improvement_tips"]
    assert result.audio is None
    call = sdk.models.calls[0]
    assert call["model"] == "flash-test"
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].response_schema is not None
    assert call["contents"][0].parts[1].inline_data.mime_type == "application/pdf"


def test_roast_with_speech_reads_comments(make_client, settings, pdf_base64: str) -> None:
    client, _ = make_client(make_response(json.dumps(ROAST)))
    tts = FakeTTS(audio=b"mp3-bytes")
    result = asyncio.run(
        roast_resume_flow(
            client,
            RoastResumeInput(pdf_base64=pdf_base64, speak=True),
            speech=SpeechSynthesizer(tts, settings),
        )
    )
    assert base64.b64decode(result.audio) == b"mp3-bytes"
    assert tts.calls[0]["input"].text == " ".join(ROAST["roast_comments"])


def test_roast_speech_failure_keeps_text(make_client, settings, pdf_base64: str) -> None:
    client, _ = make_client(make_response(json.dumps(ROAST)))
    speech = SpeechSynthesizer(FakeTTS(error=ConnectionError("tts down")), settings)
    result = asyncio.run(
        roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64, speak=True), speech=speech)
    )
    assert result.roast_comments == ROAST["roast_comments"]
    assert result.audio is None


def test_roast_missing_keys_is_parse_error(make_client, pdf_base64: str) -> None:
    client, _ = make_client(make_response(json.dumps({"roast_comments": ["only jokes"]})))
    with pytest.raises(RoastError) as excinfo:
        asyncio.run(roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64)))
    assert isinstance(excinfo.value.__cause__, ParseError)


def test_roast_invalid_json_is_parse_error(make_client, pdf_base64: str) -> None:
    client, _ = make_client(make_response("Here is your roast: you are great."))
    with pytest.raises(RoastError) as excinfo:
        asyncio.run(roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64)))
    assert isinstance(excinfo.value.__cause__, ParseError)


def test_roast_without_comments_is_error(make_client, pdf_base64: str) -> None:
    client, _ = make_client(make_response(json.dumps({"roast_comments": [], "improvement_tips": []})))
    with pytest.raises(RoastError):
        asyncio.run(roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64)))


def test_roast_service_failure_is_chained(make_client, pdf_base64: str) -> None:
    client, _ = make_client(TimeoutError("slow"))
    with pytest.raises(RoastError) as excinfo:
        asyncio.run(roast_resume_flow(client, RoastResumeInput(pdf_base64=pdf_base64)))
    assert isinstance(excinfo.value.__cause__, ServiceError)


def test_roast_result_rejects_non_list() -> None:
    with pytest.raises(ParseError):
        RoastResult.from_payload({"roast_comments": "one joke", "improvement_tips": []})
