"""
Text-to-speech wrapper.

Reads text aloud with Google Cloud Text-to-Speech using a fixed voice,
locale and MP3 encoding taken from :class:`~resumeflow.config.Settings`.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Optional

from google.cloud import texttospeech

from ..config import Settings
from ..errors import ServiceError

logger = logging.getLogger(__name__)


@dataclass
class SpeechResult:
    """Base64 encoded MP3 audio (``None`` if the service sent none)."""

    audio: Optional[str]
    raw: Any


class SpeechSynthesizer:
    def __init__(self, tts_client: Any, settings: Settings) -> None:
        self._client = tts_client
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpeechSynthesizer":
        return cls(texttospeech.TextToSpeechAsyncClient(), settings)

    async def synthesize(self, text: str) -> SpeechResult:
        """Synthesise ``text`` to MP3.

        Raises:
            ServiceError: If the Text-to-Speech call fails.
        """
        try:
            response = await self._client.synthesize_speech(
                input=texttospeech.SynthesisInput(text=text),
                voice=texttospeech.VoiceSelectionParams(
                    language_code=self.settings.tts_language_code,
                    name=self.settings.tts_voice_name,
                ),
                audio_config=texttospeech.AudioConfig(
                    audio_encoding=texttospeech.AudioEncoding.MP3,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Text-to-Speech request failed: %s", exc)
            raise ServiceError("Failed to generate speech. Ensure the API is enabled.") from exc
        audio_content = getattr(response, "audio_content", None)
        if not audio_content:
            logger.warning("Text-to-Speech returned no audio for %d characters of input", len(text))
            return SpeechResult(audio=None, raw=response)
        return SpeechResult(audio=base64.b64encode(audio_content).decode("ascii"), raw=response)
