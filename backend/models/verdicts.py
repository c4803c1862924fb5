from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from config.constants import RESULT_DEFAULTS


class Verdict(str, Enum):
    """Closed set of outcomes the model may assign to a claim."""
    TRUE = "TRUE"
    LIKELY_TRUE = "LIKELY TRUE"
    MISLEADING = "MISLEADING"
    LIKELY_FALSE = "LIKELY FALSE"
    FALSE = "FALSE"
    UNVERIFIABLE = "UNVERIFIABLE"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def from_exact(cls, value) -> Optional["Verdict"]:
        """Exact, case-sensitive lookup; no coercion of near-misses."""
        if not isinstance(value, str):
            return None
        for verdict in cls:
            if verdict.value == value:
                return verdict
        return None


class Source(BaseModel):
    """Evidentiary citation. Identity is the uri alone."""
    model_config = ConfigDict(frozen=True)

    uri: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    published: Optional[str] = None


class AnalysisResult(BaseModel):
    """Validated output of a single claim analysis."""
    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    summary: str = Field(RESULT_DEFAULTS.SUMMARY, min_length=1)
    reasoning: str = Field(RESULT_DEFAULTS.REASONING, min_length=1)
    sources: Tuple[Source, ...] = ()
