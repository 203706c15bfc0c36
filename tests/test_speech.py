"""Tests for the Text-to-Speech wrapper."""

from __future__ import annotations

import asyncio
import base64

import pytest  # type: ignore
from google.cloud import texttospeech

from conftest import FakeTTS
from resumeflow.errors import ServiceError
from resumeflow.genai.speech import SpeechSynthesizer


def test_synthesize_encodes_audio_as_base64(settings) -> None:
    tts = FakeTTS(audio=b"\x00\x01mp3")
    result = asyncio.run(SpeechSynthesizer(tts, settings).synthesize("Hello there"))
    assert base64.b64decode(result.audio) == b"\x00\x01mp3"
    request = tts.calls[0]
    assert request["input"].text == "Hello there"
    assert request["voice"].language_code == "en-IN"
    assert request["voice"].name == "en-IN-Wavenet-D"
    assert request["audio_config"].audio_encoding == texttospeech.AudioEncoding.MP3


def test_synthesize_without_audio_returns_none(settings) -> None:
    result = asyncio.run(SpeechSynthesizer(FakeTTS(audio=b""), settings).synthesize("x"))
    assert result.audio is None


def test_synthesize_wraps_transport_errors(settings) -> None:
    synth = SpeechSynthesizer(FakeTTS(error=ConnectionError("down")), settings)
    with pytest.raises(ServiceError):
        asyncio.run(synth.synthesize("x"))
