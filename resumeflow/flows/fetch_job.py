"""
Job description extraction from a URL.

The model itself visits the page through Google Search grounding; no
HTTP request or HTML parsing happens locally.  A page that is not a job
post, an answer that is too short to be a job description, and a failed
request are all reported as a miss rather than raised, because a
missing job description is an expected outcome for the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from ..genai.client import GenAIClient, ModelTier
from .rank_resume import MIN_JOB_DESCRIPTION_CHARS

logger = logging.getLogger(__name__)

INVALID_JOB_POST = "INVALID_JOB_POST"


class MissReason(enum.Enum):
    INVALID_POST = "invalid_post"
    TOO_SHORT = "too_short"
    ERROR = "error"


@dataclass(frozen=True)
class JobDescriptionFetch:
    """Either the extracted text or the reason nothing was extracted."""

    text: Optional[str] = None
    miss_reason: Optional[MissReason] = None

    @property
    def found(self) -> bool:
        return self.text is not None

    @classmethod
    def hit(cls, text: str) -> "JobDescriptionFetch":
        return cls(text=text)

    @classmethod
    def miss(cls, reason: MissReason) -> "JobDescriptionFetch":
        return cls(miss_reason=reason)


def build_extraction_query(url: str) -> str:
    return (
        f"Go to this URL: {url}. \n\n"
        "Task: Extract the full Job Description text. \n\n"
        "Output: Return ONLY the raw text content (Responsibilities, Requirements, Skills). \n"
        f'If the link is invalid or not a job posting, return exactly: "{INVALID_JOB_POST}"'
    )


async def fetch_job_description(client: GenAIClient, url: str) -> JobDescriptionFetch:
    """Extract the job description behind ``url``.

    Never raises for extraction problems; see :class:`MissReason`.
    """
    try:
        text = await client.search_grounded(build_extraction_query(url), ModelTier.FAST)
    except Exception as exc:  # noqa: BLE001
        logger.error("JD fetch error for %s: %s", url, exc)
        return JobDescriptionFetch.miss(MissReason.ERROR)
    if INVALID_JOB_POST in text:
        logger.info("Model reported %s is not a job post", url)
        return JobDescriptionFetch.miss(MissReason.INVALID_POST)
    if len(text) < MIN_JOB_DESCRIPTION_CHARS:
        logger.info("Extracted text from %s too short (%d chars)", url, len(text))
        return JobDescriptionFetch.miss(MissReason.TOO_SHORT)
    return JobDescriptionFetch.hit(text)


async def fetch_job_description_from_url(client: GenAIClient, url: str) -> Optional[str]:
    """Like :func:`fetch_job_description` but ``None`` on any miss."""
    result = await fetch_job_description(client, url)
    return result.text
