"""Shared fixtures: in-memory stand-ins for the Gemini and TTS SDK clients."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest  # type: ignore
from google.genai import types

from resumeflow.config import Settings
from resumeflow.genai.client import GenAIClient

SAMPLE_PDF = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"


def make_response(text: str | None) -> types.GenerateContentResponse:
    """Build a ``GenerateContentResponse`` whose first part carries ``text``."""
    parts = [types.Part(text=text)] if text is not None else []
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))]
    )


class FakeModels:
    """Records ``generate_content`` calls and replays canned responses."""

    def __init__(self, responses: List[Any]) -> None:
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def generate_content(self, *, model: str, contents: Any, config: Any) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGenAISDK:
    def __init__(self, responses: List[Any]) -> None:
        self.models = FakeModels(responses)
        self.aio = SimpleNamespace(models=self.models)


class FakeTTS:
    def __init__(self, audio: bytes | None = b"ID3fake-mp3", error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def synthesize_speech(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(audio_content=self.audio)


@pytest.fixture
def settings() -> Settings:
    return Settings(project_id="test-project", flash_model="flash-test", pro_model="pro-test")


@pytest.fixture
def make_client(settings: Settings):
    """Factory returning ``(GenAIClient, FakeGenAISDK)`` for canned responses."""

    def _make(*responses: Any):
        sdk = FakeGenAISDK(list(responses))
        return GenAIClient(sdk, settings), sdk

    return _make


@pytest.fixture
def pdf_base64() -> str:
    return base64.b64encode(SAMPLE_PDF).decode("ascii")
