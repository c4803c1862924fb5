from dataclasses import dataclass

@dataclass(frozen=True)
class LLMConfig:
    DEFAULT_TEMPERATURE: float = 0.1
    REQUEST_TIMEOUT: float = 60.0
    RAW_TEXT_LOG_LIMIT: int = 2000

@dataclass(frozen=True)
class ClaimLimits:
    MIN_LENGTH: int = 3
    MAX_LENGTH: int = 5000

@dataclass(frozen=True)
class ResultDefaults:
    SUMMARY: str = "No summary provided."
    REASONING: str = "No reasoning provided."

@dataclass(frozen=True)
class PromptConfig:
    """Knobs baked into the fact-check prompt."""
    RECENCY_MONTHS: int = 12
    ASSISTANT_NAME: str = "Fact Check AI"

LLM_CONFIG = LLMConfig()
CLAIM_LIMITS = ClaimLimits()
RESULT_DEFAULTS = ResultDefaults()
PROMPT_CONFIG = PromptConfig()
