from .llm import GeminiTransport, GenerationOptions, web_search_tools
from .extraction import extract_reply_text, extract_grounding_chunks
from .normalizer import normalize_reply, dedupe_sources, extract_grounding_sources
from .errors import classify_failure
from .fact_checker import FactCheckService, create_fact_check_service

__all__ = [
    "GeminiTransport",
    "GenerationOptions",
    "web_search_tools",
    "extract_reply_text",
    "extract_grounding_chunks",
    "normalize_reply",
    "dedupe_sources",
    "extract_grounding_sources",
    "classify_failure",
    "FactCheckService",
    "create_fact_check_service",
]
