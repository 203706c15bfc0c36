"""
Résumé ranking flow.

Sends the résumé PDF together with a role-specific instruction to the
high-quality model in JSON mode and validates the answer into a
:class:`~resumeflow.flows.schemas.RankingResult`.  When a usable job
description is supplied the model is told to judge strictly against it
instead of generic assumptions about the role.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..errors import RankingError
from ..genai.client import GenAIClient, GenerationOptions, ModelTier
from ..genai.content import InlineMedia, Part, TextPart
from ..prompts import load_prompt
from .schemas import RANKING_RESPONSE_SCHEMA, RankingResult

logger = logging.getLogger(__name__)

RANKER_PROMPT = "ranker-prompt.md"
PDF_MIME_TYPE = "application/pdf"
# Shorter job descriptions are ignored.
MIN_JOB_DESCRIPTION_CHARS = 50


@dataclass
class RankResumeInput:
    pdf_base64: str
    job_role: str
    field: str
    job_description: Optional[str] = None


def job_description_directive(job_role: str, job_description: str) -> str:
    return (
        f'\n\nCRITICAL INSTRUCTION: Ignore generic assumptions about the role "{job_role}". '
        "\nCompare the resume data strictly against the following provided JOB DESCRIPTION:"
        f'\n\n"""\n{job_description}\n"""\n\n'
        "Calculate the match score and missing keywords based ONLY on the requirements listed above."
    )


def build_ranking_prompt(data: RankResumeInput) -> List[Part]:
    """Assemble ``[instructions, résumé PDF]`` for the ranking request."""
    text = load_prompt(RANKER_PROMPT, {"jobRole": data.job_role, "field": data.field})
    if data.job_description and len(data.job_description) > MIN_JOB_DESCRIPTION_CHARS:
        text += job_description_directive(data.job_role, data.job_description)
    return [TextPart(text), InlineMedia(mime_type=PDF_MIME_TYPE, data=data.pdf_base64)]


async def rank_resume_flow(client: GenAIClient, data: RankResumeInput) -> RankingResult:
    """Rank a résumé against a role, field and optional job description.

    Args:
        client: Invocation client.
        data: Base64 PDF plus the target role, field and job description.

    Returns:
        The validated ranking.

    Raises:
        RankingError: If generation, parsing or validation fails.  The
            underlying error is chained as ``__cause__``.
    """
    prompt = build_ranking_prompt(data)
    try:
        payload = await client.invoke_structured(
            prompt,
            ModelTier.HIGH_QUALITY,
            GenerationOptions(response_schema=RANKING_RESPONSE_SCHEMA),
        )
        result = RankingResult.from_payload(payload)
    except Exception as exc:  # noqa: BLE001
        logger.error("Rank resume error for role '%s': %s", data.job_role, exc)
        raise RankingError("Failed to rank resume. Ensure the PDF is valid.") from exc
    logger.info("Ranked resume for role '%s': score %d", data.job_role, result.match_score)
    return result
