"""
Prompt templates.

Templates are Markdown files under ``templates/`` with ``{{name}}``
placeholders.  :func:`load_prompt` reads one and fills the placeholders.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Mapping, Optional

from ..errors import PromptNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def render(template: str, variables: Mapping[str, object]) -> str:
    """Substitute ``{{key}}`` placeholders; unknown keys are left as is."""

    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return str(variables[key])

    return _PLACEHOLDER_RE.sub(_sub, template)


def load_prompt(name: str, variables: Optional[Mapping[str, object]] = None) -> str:
    """Load template ``name`` and render it.

    Raises:
        PromptNotFoundError: If no such template exists.
    """
    path = TEMPLATE_DIR / name
    if not path.is_file():
        raise PromptNotFoundError(f"Prompt template not found: {name}")
    template = path.read_text(encoding="utf-8")
    rendered = render(template, variables or {})
    logger.debug("Loaded prompt %s (%d chars)", name, len(rendered))
    return rendered
