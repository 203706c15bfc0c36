"""
Exception hierarchy for ResumeFlow.

Every error raised by the package derives from :class:`ResumeFlowError`
so callers can catch a single type.  A job description that could not
be extracted is *not* an error; see
:class:`resumeflow.flows.fetch_job.JobDescriptionFetch`.
"""

from __future__ import annotations

from typing import Optional


class ResumeFlowError(RuntimeError):
    """Base class for all ResumeFlow errors."""


class ConfigError(ResumeFlowError):
    """Raised when a configuration file cannot be read."""


class ServiceError(ResumeFlowError):
    """Raised when a call to the generative or speech service fails."""


# Network, auth and quota failures all surface as ServiceError.
TransportError = ServiceError


class ParseError(ResumeFlowError):
    """Raised when structured model output cannot be parsed.

    The unparsed response text is kept on ``raw_text`` for diagnosis.
    """

    def __init__(self, message: str, raw_text: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class PromptFormatError(ResumeFlowError):
    """Raised in strict mode when a prompt part has an unknown shape."""


class PromptNotFoundError(ResumeFlowError):
    """Raised when a prompt template does not exist."""


class FlowError(ResumeFlowError):
    """Base class for user-facing flow failures."""


class RankingError(FlowError):
    """Raised when a résumé could not be ranked."""


class RoastError(FlowError):
    """Raised when a résumé could not be roasted."""
