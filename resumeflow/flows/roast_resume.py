"""
Résumé roast flow.

Asks the fast model for a humorous critique of the résumé, tailored to
the target role and field, as two lists: roast comments and improvement
tips.  When a speech synthesiser is given the comments are read aloud.
Audio is best effort: if synthesis fails the roast is still returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..errors import RoastError, ServiceError
from ..genai.client import GenAIClient, GenerationOptions, ModelTier
from ..genai.content import InlineMedia, Part, TextPart
from ..genai.speech import SpeechSynthesizer
from ..prompts import load_prompt
from .rank_resume import PDF_MIME_TYPE
from .schemas import ROAST_RESPONSE_SCHEMA, RoastResult

logger = logging.getLogger(__name__)

ROAST_PROMPT = "roast-prompt.md"


@dataclass
class RoastResumeInput:
    pdf_base64: str
    job_role: str = "Target Role"
    field: str = "General"
    speak: bool = False


def build_roast_prompt(data: RoastResumeInput) -> List[Part]:
    text = load_prompt(ROAST_PROMPT, {"jobRole": data.job_role, "field": data.field})
    return [TextPart(text), InlineMedia(mime_type=PDF_MIME_TYPE, data=data.pdf_base64)]


async def roast_resume_flow(
    client: GenAIClient,
    data: RoastResumeInput,
    speech: Optional[SpeechSynthesizer] = None,
) -> RoastResult:
    """Roast a résumé.

    Raises:
        RoastError: If generation, parsing or validation fails, or the
            model produced no comments.  The underlying error is chained.
    """
    try:
        payload = await client.invoke_structured(
            build_roast_prompt(data),
            ModelTier.FAST,
            GenerationOptions(temperature=1.0, response_schema=ROAST_RESPONSE_SCHEMA),
        )
        result = RoastResult.from_payload(payload)
    except Exception as exc:  # noqa: BLE001
        logger.error("Roast resume error for role '%s': %s", data.job_role, exc)
        raise RoastError("Failed to roast resume. Ensure the PDF is valid.") from exc
    if not result.roast_comments:
        raise RoastError("The model returned an empty roast.")

    if data.speak and speech is not None:
        try:
            result.audio = (await speech.synthesize(result.narration())).audio
        except ServiceError as exc:
            logger.warning("Roast narration failed, returning text only: %s", exc)
    return result
