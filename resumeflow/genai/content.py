"""
Prompt content formatting.

A prompt is either a plain string or an ordered sequence of parts.  The
parts callers hand us are loosely shaped: bare strings, ``{"text": ...}``
mappings or ``{"media": {"url": ...}}`` mappings whose URL is either a
``data:`` URI carrying an inline payload or a reference to a file stored
elsewhere.  :func:`format_prompt` turns all of these into the typed
variants below, preserving order, and :func:`to_sdk_parts` converts the
typed variants into Gemini SDK parts.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union
from urllib.parse import unquote_to_bytes

from google.genai import types

from ..errors import PromptFormatError

logger = logging.getLogger(__name__)

DATA_URI_SCHEME = "data:"
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineMedia:
    """Binary attachment sent inline.

    ``data`` is base64 text unless ``base64_encoded`` is false, in which
    case it is percent-encoded as in a plain ``data:`` URI.
    """

    mime_type: str
    data: str
    base64_encoded: bool = True


@dataclass(frozen=True)
class ExternalMedia:
    """Reference to a file the service fetches itself (e.g. ``gs://``)."""

    uri: str
    mime_type: Optional[str] = None


Part = Union[TextPart, InlineMedia, ExternalMedia]
Prompt = Union[str, Sequence[Any]]


def parse_data_uri(url: str) -> InlineMedia:
    """Split ``data:<mime>[;base64],<payload>`` into an :class:`InlineMedia`.

    The payload is everything after the first comma, untouched.
    """
    header, _, payload = url.partition(",")
    params = header[len(DATA_URI_SCHEME):].split(";")
    mime_type = params[0].strip() or DEFAULT_MIME_TYPE
    return InlineMedia(mime_type=mime_type, data=payload, base64_encoded="base64" in params[1:])


def _media_part(media: Any) -> Optional[Part]:
    url = media.get("url") if isinstance(media, Mapping) else None
    if not url or not isinstance(url, str):
        return None
    if url.startswith(DATA_URI_SCHEME):
        return parse_data_uri(url)
    return ExternalMedia(uri=url, mime_type=media.get("content_type") or media.get("contentType"))


def _coerce_part(item: Any) -> Optional[Part]:
    if isinstance(item, (TextPart, InlineMedia, ExternalMedia)):
        return item
    if isinstance(item, str):
        return TextPart(item)
    if isinstance(item, Mapping):
        if item.get("text"):
            return TextPart(str(item["text"]))
        if "media" in item:
            return _media_part(item["media"])
    return None


def format_prompt(prompt: Prompt, strict: bool = False) -> List[Part]:
    """Normalise a prompt into an ordered list of typed parts.

    Args:
        prompt: A string, or a sequence of strings, typed parts and
            loosely shaped mappings.
        strict: Raise instead of dropping elements of unknown shape.

    Returns:
        The parts in input order.  A string prompt yields exactly one
        :class:`TextPart`.

    Raises:
        PromptFormatError: In strict mode, for an unrecognised element.
    """
    if isinstance(prompt, str):
        return [TextPart(prompt)]
    parts: List[Part] = []
    for index, item in enumerate(prompt):
        part = _coerce_part(item)
        if part is None:
            if strict:
                raise PromptFormatError(f"Unrecognised prompt part at index {index}: {item!r}")
            logger.debug("Dropping unrecognised prompt part at index %d", index)
            continue
        parts.append(part)
    return parts


def decode_inline_data(part: InlineMedia) -> bytes:
    """Return the raw bytes of an inline attachment.

    Raises:
        PromptFormatError: If a base64 payload is malformed.
    """
    if not part.base64_encoded:
        return unquote_to_bytes(part.data)
    try:
        return base64.b64decode(part.data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PromptFormatError(f"Inline {part.mime_type} attachment is not valid base64: {exc}") from exc


def to_sdk_part(part: Part) -> types.Part:
    if isinstance(part, TextPart):
        return types.Part(text=part.text)
    if isinstance(part, InlineMedia):
        return types.Part(inline_data=types.Blob(mime_type=part.mime_type, data=decode_inline_data(part)))
    mime_type = part.mime_type or mimetypes.guess_type(part.uri)[0] or DEFAULT_MIME_TYPE
    return types.Part(file_data=types.FileData(file_uri=part.uri, mime_type=mime_type))


def to_sdk_parts(parts: Sequence[Part]) -> List[types.Part]:
    return [to_sdk_part(p) for p in parts]


def to_contents(prompt: Prompt, strict: bool = False) -> List[types.Content]:
    """Format ``prompt`` as a single user turn for ``generate_content``."""
    return [types.Content(role="user", parts=to_sdk_parts(format_prompt(prompt, strict=strict)))]
