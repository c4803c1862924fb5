from enum import Enum
from typing import Optional, Dict, Any

class FactCheckException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class ErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_VERDICT = "invalid_verdict"
    UNKNOWN = "unknown"

ERROR_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.CONFIGURATION: "API key not found. Please set GEMINI_API_KEY in your environment or .env file.",
    ErrorCategory.AUTHENTICATION: "API key is invalid. Please check your API key in the .env file.",
    ErrorCategory.AUTHORIZATION: "API access forbidden. Please ensure your API key has the correct permissions.",
    ErrorCategory.RATE_LIMIT: "API rate limit exceeded. Please wait a moment before trying again.",
    ErrorCategory.TRANSPORT: "Failed to connect to the AI service. Please try again later.",
    ErrorCategory.MALFORMED_RESPONSE: "The AI returned an invalid response format. Please try rephrasing your claim.",
    ErrorCategory.INVALID_VERDICT: "The AI returned an unknown verdict: {value}",
    ErrorCategory.UNKNOWN: "An unknown error occurred during analysis.",
}

class AnalysisError(FactCheckException):
    """The single error type surfaced by claim analysis, tagged with a category."""

    def __init__(
        self,
        category: ErrorCategory,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.category = category
        super().__init__(message or ERROR_MESSAGES[category], details)

    @classmethod
    def invalid_verdict(cls, value: Any) -> "AnalysisError":
        return cls(
            ErrorCategory.INVALID_VERDICT,
            ERROR_MESSAGES[ErrorCategory.INVALID_VERDICT].format(value=value),
            {"verdict": value}
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["category"] = self.category.value
        return data

class ValidationException(FactCheckException):
    def __init__(self, field: str, reason: str):
        self.reason = reason
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )
