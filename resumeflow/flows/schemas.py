"""
Result types for the flows and the JSON schema sent to the model.

The ranking result travels over the wire with the model's key names
(``match_score``, ``keywords_missing``, ``final_recommendation``...)
and is exposed locally as :class:`RankingResult`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ParseError

logger = logging.getLogger(__name__)

RANKING_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "match_score": {
            "type": "INTEGER",
            "description": "0-100 score of how well the resume matches the role",
        },
        "strengths": {"type": "STRING", "description": "Key strong points"},
        "weaknesses": {"type": "STRING", "description": "Areas lacking"},
        "keywords_missing": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Important keywords from the industry missing in the resume",
        },
        "final_recommendation": {"type": "STRING", "description": "Actionable advice"},
    },
    "required": [
        "match_score",
        "strengths",
        "weaknesses",
        "keywords_missing",
        "final_recommendation",
    ],
}


@dataclass
class RankingResult:
    """Outcome of ranking a résumé against a role or job description."""

    match_score: int
    strengths: str
    weaknesses: str
    missing_keywords: List[str] = field(default_factory=list)
    recommendation: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "RankingResult":
        """Validate a parsed model response.

        The score is coerced to ``int`` but not clamped; a value outside
        0-100 is logged and passed through.

        Raises:
            ParseError: If a key is missing or has the wrong type.
        """
        if not isinstance(payload, dict):
            raise ParseError(f"Expected a JSON object, got {type(payload).__name__}", raw_text=repr(payload))
        missing = [k for k in RANKING_RESPONSE_SCHEMA["required"] if k not in payload]
        if missing:
            raise ParseError(f"Ranking response is missing keys: {', '.join(missing)}", raw_text=repr(payload))
        try:
            score = int(payload["match_score"])
        except (TypeError, ValueError) as exc:
            raise ParseError(
                f"match_score is not a number: {payload['match_score']!r}", raw_text=repr(payload)
            ) from exc
        keywords = payload["keywords_missing"]
        if not isinstance(keywords, list):
            raise ParseError("keywords_missing must be a list", raw_text=repr(payload))
        if not 0 <= score <= 100:
            logger.warning("Model returned match_score %d outside 0-100", score)
        return cls(
            match_score=score,
            strengths=str(payload["strengths"]),
            weaknesses=str(payload["weaknesses"]),
            missing_keywords=[str(k) for k in keywords],
            recommendation=str(payload["final_recommendation"]),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "match_score": self.match_score,
            "strengths": self.strengths,
            "weaknesses": self.weaknesses,
            "keywords_missing": list(self.missing_keywords),
            "final_recommendation": self.recommendation,
        }


ROAST_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "roast_comments": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Short humorous jabs at the resume",
        },
        "improvement_tips": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Genuinely useful fixes for the resume",
        },
    },
    "required": ["roast_comments", "improvement_tips"],
}


@dataclass
class RoastResult:
    """Humorous critique plus tips; ``audio`` is base64 MP3 narration."""

    roast_comments: List[str] = field(default_factory=list)
    improvement_tips: List[str] = field(default_factory=list)
    audio: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "RoastResult":
        """Validate a parsed roast response.

        Raises:
            ParseError: If either list is missing or not a list.
        """
        if not isinstance(payload, dict):
            raise ParseError(f"Expected a JSON object, got {type(payload).__name__}", raw_text=repr(payload))
        for key in ROAST_RESPONSE_SCHEMA["required"]:
            if not isinstance(payload.get(key), list):
                raise ParseError(f"Roast response key '{key}' is missing or not a list", raw_text=repr(payload))
        return cls(
            roast_comments=[str(c) for c in payload["roast_comments"]],
            improvement_tips=[str(t) for t in payload["improvement_tips"]],
        )

    def narration(self) -> str:
        return " ".join(self.roast_comments)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "roast_comments": list(self.roast_comments),
            "improvement_tips": list(self.improvement_tips),
        }
