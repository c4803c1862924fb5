import json
from typing import Any, Dict, Iterable, List, Optional

from config import logger
from config.constants import LLM_CONFIG, RESULT_DEFAULTS
from exceptions import AnalysisError, ErrorCategory
from models.verdicts import AnalysisResult, Source, Verdict
from utils.parsing import strip_code_fence, truncate_for_log
from .extraction import extract_grounding_chunks, extract_reply_text


def parse_reply_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.error(
            "Failed to parse JSON response from Gemini: %s. Raw text: %s",
            e,
            truncate_for_log(text, LLM_CONFIG.RAW_TEXT_LOG_LIMIT),
        )
        raise AnalysisError(ErrorCategory.MALFORMED_RESPONSE, details={"reason": str(e)}) from e


def validate_verdict(parsed: Any) -> Verdict:
    value = parsed.get("verdict") if isinstance(parsed, dict) else None
    verdict = Verdict.from_exact(value)
    if verdict is None:
        logger.warning("Gemini returned an unknown verdict: %r", value)
        raise AnalysisError.invalid_verdict(value)
    return verdict


def _text_or_default(parsed: Dict[str, Any], key: str, default: str) -> str:
    value = parsed.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return default


def dedupe_sources(sources: Iterable[Source]) -> List[Source]:
    """Deduplicate by uri: first-seen position, last-seen value."""
    unique: Dict[str, Source] = {}
    for source in sources:
        unique[source.uri] = source
    return list(unique.values())


def _reported_publication_dates(parsed: Dict[str, Any]) -> Dict[str, str]:
    reported = parsed.get("sources")
    if not isinstance(reported, list):
        return {}
    dates = {}
    for item in reported:
        if not isinstance(item, dict):
            continue
        uri, published = item.get("uri"), item.get("published")
        if isinstance(uri, str) and isinstance(published, str) and published:
            dates[uri] = published
    return dates


def extract_grounding_sources(raw: Any, parsed: Optional[Dict[str, Any]] = None) -> List[Source]:
    """
    Build the evidence list from the transport's grounding metadata.
    Args:
        raw: The raw reply envelope
        parsed: The model's parsed answer, used only for publication dates
    Returns:
        Deduplicated sources; empty when the reply carries no grounding metadata
    """
    candidates: List[Source] = []
    for uri, title in extract_grounding_chunks(raw):
        if not (isinstance(uri, str) and uri and isinstance(title, str) and title):
            continue
        candidates.append(Source(uri=uri, title=title))

    sources = dedupe_sources(candidates)

    dates = _reported_publication_dates(parsed or {})
    if dates:
        sources = [
            s.model_copy(update={"published": dates[s.uri]}) if s.uri in dates else s
            for s in sources
        ]
    return sources


def build_result(parsed: Dict[str, Any], verdict: Verdict, sources: List[Source]) -> AnalysisResult:
    return AnalysisResult(
        verdict=verdict,
        summary=_text_or_default(parsed, "summary", RESULT_DEFAULTS.SUMMARY),
        reasoning=_text_or_default(parsed, "reasoning", RESULT_DEFAULTS.REASONING),
        sources=tuple(sources),
    )


async def normalize_reply(raw: Any) -> AnalysisResult:
    """Turn a raw Gemini reply into a validated AnalysisResult or raise AnalysisError."""
    text = await extract_reply_text(raw)
    payload = strip_code_fence(text)
    parsed = parse_reply_json(payload)
    verdict = validate_verdict(parsed)
    sources = extract_grounding_sources(raw, parsed)

    logger.info("Normalized reply: verdict=%s, %d sources", verdict.value, len(sources))
    return build_result(parsed, verdict, sources)

