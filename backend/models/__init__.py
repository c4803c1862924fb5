from .verdicts import (
    Verdict,
    Source,
    AnalysisResult,
)
from .api import (
    VerifyRequest,
    VerifyResponse,
    ErrorResponse,
)

__all__ = [
    "Verdict",
    "Source",
    "AnalysisResult",

    "VerifyRequest",
    "VerifyResponse",
    "ErrorResponse",
]
