"""
Readers for the raw reply envelope returned by the Gemini transport.

The envelope may be the REST JSON (nested dicts, camelCase keys) or an SDK
response object (attributes, snake_case keys). Every reader here degrades to
``None`` or an empty list instead of raising.
"""
import inspect
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

from config import logger


def _field(obj: Any, *names: str) -> Any:
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _first(items: Any) -> Any:
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


def _first_candidate(raw: Any) -> Any:
    return _first(_field(raw, "candidates"))


def _text_accessor(raw: Any) -> Any:
    accessor = _field(raw, "text")
    if callable(accessor):
        return accessor()
    return None


def _text_field(raw: Any) -> Optional[str]:
    value = _field(raw, "text")
    return value if isinstance(value, str) else None


def _candidate_content(raw: Any) -> Optional[str]:
    content = _field(_first_candidate(raw), "content")
    if isinstance(content, str):
        return content
    parts = _field(content, "parts")
    if not isinstance(parts, (list, tuple)):
        return None
    texts = [t for t in (_field(part, "text") for part in parts) if isinstance(t, str)]
    return "".join(texts) if texts else None


def _candidate_text(raw: Any) -> Optional[str]:
    value = _field(_first_candidate(raw), "text")
    return value if isinstance(value, str) else None


# Priority order matters: the first strategy yielding non-empty text wins.
TEXT_EXTRACTORS: Tuple[Tuple[str, Callable[[Any], Any]], ...] = (
    ("text_accessor", _text_accessor),
    ("text_field", _text_field),
    ("candidate_content", _candidate_content),
    ("candidate_text", _candidate_text),
)


async def extract_reply_text(raw: Any) -> str:
    """Resolve the textual payload of a reply, trimmed, or an empty string."""
    for name, extractor in TEXT_EXTRACTORS:
        try:
            value = extractor(raw)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            logger.warning("Reply text extractor %s failed: %s", name, e)
            continue
        if not isinstance(value, str):
            continue
        text = value.strip()
        if text:
            logger.debug("Reply text resolved via %s", name)
            return text
    return ""


def extract_grounding_chunks(raw: Any) -> List[Tuple[Optional[str], Optional[str]]]:
    """Return (uri, title) pairs from the first candidate's grounding metadata."""
    metadata = _field(_first_candidate(raw), "groundingMetadata", "grounding_metadata")
    chunks = _field(metadata, "groundingChunks", "grounding_chunks")
    if not isinstance(chunks, (list, tuple)):
        return []

    pairs = []
    for chunk in chunks:
        web = _field(chunk, "web")
        if web is None:
            continue
        pairs.append((_field(web, "uri"), _field(web, "title")))
    return pairs
