"""
Gemini invocation client.

:class:`GenAIClient` wraps the ``google-genai`` SDK (Vertex AI backend)
behind three calls:

* :meth:`GenAIClient.invoke` – plain generation, optionally with extra
  tool declarations.
* :meth:`GenAIClient.invoke_structured` – JSON response mode; the text is
  cleaned of Markdown code fences and parsed.
* :meth:`GenAIClient.search_grounded` – generation with the Google Search
  grounding tool attached so the model can read live web content.

Each call is a single request.  Failures are logged and re-raised as
:class:`~resumeflow.errors.ServiceError` or
:class:`~resumeflow.errors.ParseError`; nothing is retried.  The SDK
client is injected so tests can substitute a fake.
"""

from __future__ import annotations

import enum
import json
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types

from ..config import Settings
from ..errors import ParseError, ServiceError
from .content import Prompt, to_contents

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"
NO_SEARCH_RESULT = "No information found."

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class ModelTier(enum.Enum):
    """Which model services a request."""

    FAST = "fast"
    HIGH_QUALITY = "high_quality"


@dataclass(frozen=True)
class GenerationOptions:
    """Optional request settings merged into ``GenerateContentConfig``.

    ``None`` means "not set".  In :meth:`merged`, every field set on the
    override replaces the value here, except ``tools`` which are
    appended after the existing ones.
    """

    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    response_mime_type: Optional[str] = None
    response_schema: Optional[Dict[str, Any]] = None
    system_instruction: Optional[str] = None
    tools: List[types.Tool] = field(default_factory=list)

    def merged(self, overrides: Optional["GenerationOptions"]) -> "GenerationOptions":
        if overrides is None:
            return self
        updates: Dict[str, Any] = {
            name: getattr(overrides, name)
            for name in (
                "temperature",
                "max_output_tokens",
                "response_mime_type",
                "response_schema",
                "system_instruction",
            )
            if getattr(overrides, name) is not None
        }
        updates["tools"] = list(self.tools) + list(overrides.tools)
        return replace(self, **updates)

    def to_config(self) -> types.GenerateContentConfig:
        kwargs: Dict[str, Any] = {
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
            "response_mime_type": self.response_mime_type,
            "response_schema": self.response_schema,
            "system_instruction": self.system_instruction,
            "tools": list(self.tools) or None,
        }
        return types.GenerateContentConfig(**{k: v for k, v in kwargs.items() if v is not None})


@dataclass
class GenerationResult:
    """Text of the first candidate plus the untouched SDK response."""

    text: str
    raw: Any


def google_search_tool() -> types.Tool:
    return types.Tool(google_search=types.GoogleSearch())


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers that models like to wrap JSON in."""
    return _FENCE_RE.sub("", text).strip()


def extract_text(response: Any) -> str:
    """Return the first candidate's first text part, or ``""``.

    Raises:
        ServiceError: If ``response`` does not look like a
            ``GenerateContentResponse`` at all.
    """
    if not hasattr(response, "candidates"):
        raise ServiceError(f"Unexpected response type from model: {type(response).__name__}")
    candidates = response.candidates or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return ""
    return getattr(parts[0], "text", None) or ""


class GenAIClient:
    """Issue generation requests against the fast or high-quality model."""

    def __init__(self, sdk_client: Any, settings: Settings) -> None:
        self._client = sdk_client
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenAIClient":
        """Build a Vertex AI backed client from configuration."""
        sdk_client = genai.Client(
            vertexai=True,
            project=settings.project_id or None,
            location=settings.location,
        )
        return cls(sdk_client, settings)

    def model_for(self, tier: ModelTier) -> str:
        if tier is ModelTier.HIGH_QUALITY:
            return self.settings.pro_model
        return self.settings.flash_model

    async def invoke(
        self,
        prompt: Prompt,
        tier: ModelTier = ModelTier.FAST,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Send one generation request and return its text.

        Args:
            prompt: String or sequence of parts (see :mod:`.content`).
            tier: Model tier to use.
            options: Request settings; ``tools`` are added to the request.

        Returns:
            A :class:`GenerationResult`.  ``text`` is ``""`` when the
            model produced no text part.

        Raises:
            ServiceError: If the SDK call fails or returns an
                unexpected object.
            PromptFormatError: If an inline attachment cannot be decoded.
        """
        model = self.model_for(tier)
        opts = GenerationOptions().merged(options)
        contents = to_contents(prompt)
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=opts.to_config(),
            )
            text = extract_text(response)
        except ServiceError:
            logger.error("AI generation returned an unexpected response (model=%s)", model)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("AI generation failed (model=%s): %s", model, exc)
            raise ServiceError(f"AI generation failed for model {model}: {exc}") from exc
        logger.debug("Model %s returned %d characters", model, len(text))
        return GenerationResult(text=text, raw=response)

    async def invoke_structured(
        self,
        prompt: Prompt,
        tier: ModelTier = ModelTier.FAST,
        options: Optional[GenerationOptions] = None,
    ) -> Any:
        """Request JSON output and return it parsed.

        Raises:
            ServiceError: If the request fails.
            ParseError: If the cleaned text is not valid JSON; the raw
                text is attached.
        """
        opts = GenerationOptions(response_mime_type=JSON_MIME_TYPE).merged(options)
        result = await self.invoke(prompt, tier, opts)
        cleaned = strip_code_fences(result.text)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as exc:
            logger.error("JSON parse error. Raw text: %s", result.text[:500])
            raise ParseError("Failed to parse AI response as JSON", raw_text=result.text) from exc

    async def search_grounded(self, query: str, tier: ModelTier = ModelTier.FAST) -> str:
        """Answer ``query`` with Google Search grounding enabled.

        Returns:
            The model's text, or ``"No information found."`` if empty.

        Raises:
            ServiceError: If the request fails.
        """
        result = await self.invoke(query, tier, GenerationOptions(tools=[google_search_tool()]))
        return result.text or NO_SEARCH_RESULT
