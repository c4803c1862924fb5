from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .verdicts import AnalysisResult, Source, Verdict


class VerifyRequest(BaseModel):
    """Request body for /verify endpoint with validation."""
    claim: str

    @field_validator('claim')
    @classmethod
    def sanitize_claim(cls, v: str) -> str:
        """Sanitize and validate claim input."""
        from exceptions import ValidationException
        from utils.validation import InputValidator

        try:
            return InputValidator.sanitize_claim(v)
        except ValidationException as e:
            raise ValueError(e.reason) from e

    model_config = {
        "json_schema_extra": {
            "example": {
                "claim": "The Eiffel Tower was completed in 1889."
            }
        }
    }


class VerifyResponse(BaseModel):
    """Complete response from /verify endpoint."""
    claim: str
    verdict: Verdict
    verdict_label: str
    summary: str
    reasoning: str
    sources: List[Source] = Field(default_factory=list)

    @classmethod
    def from_result(cls, claim: str, result: AnalysisResult) -> "VerifyResponse":
        return cls(
            claim=claim,
            verdict=result.verdict,
            verdict_label=result.verdict.label,
            summary=result.summary,
            reasoning=result.reasoning,
            sources=list(result.sources),
        )


class ErrorResponse(BaseModel):
    error: str
    category: Optional[str] = None
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    request_id: Optional[str] = None
