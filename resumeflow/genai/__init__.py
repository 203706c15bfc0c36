"""
Generative AI service wrappers.

* `content` – Normalises prompts into typed parts and SDK parts.
* `client` – Plain, grounded and structured Gemini generation.
* `speech` – Cloud Text-to-Speech synthesis.
"""

from .client import GenAIClient, GenerationOptions, GenerationResult, ModelTier  # noqa: F401
from .content import ExternalMedia, InlineMedia, TextPart, format_prompt  # noqa: F401
from .speech import SpeechResult, SpeechSynthesizer  # noqa: F401
