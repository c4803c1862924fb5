from typing import Any, Dict, Optional

import httpx

from config import logger
from exceptions import AnalysisError, ErrorCategory

STATUS_CATEGORIES: Dict[int, ErrorCategory] = {
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.AUTHORIZATION,
    429: ErrorCategory.RATE_LIMIT,
}

RATE_LIMIT_MARKERS = ("429", "rate limit", "too many requests", "resource_exhausted", "resource exhausted")


def _status_code(exc: BaseException) -> Optional[int]:
    """Best-effort status code from the failure's available signals."""
    response = getattr(exc, "response", None)
    candidates = (
        getattr(response, "status_code", None),
        getattr(response, "status", None),
        getattr(exc, "status_code", None),
        getattr(exc, "code", None),
        getattr(exc, "status", None),
    )
    for value in candidates:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


def _mentions_rate_limit(exc: BaseException) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def classify_failure(exc: BaseException, during_transport: bool = False) -> AnalysisError:
    """
    Map a raw failure onto exactly one error category.
    Args:
        exc: The failure raised by the transport or the normalization steps
        during_transport: Whether the failure came from the transport call
    Returns:
        An AnalysisError carrying the category and its user-facing message
    """
    if isinstance(exc, AnalysisError):
        return exc

    details: Dict[str, Any] = {"cause": exc.__class__.__name__}
    status = _status_code(exc)
    if status is not None:
        details["status_code"] = status

    category = STATUS_CATEGORIES.get(status)
    if category is None and _mentions_rate_limit(exc):
        category = ErrorCategory.RATE_LIMIT
    if category is None:
        if during_transport or isinstance(exc, httpx.HTTPError):
            category = ErrorCategory.TRANSPORT
        else:
            category = ErrorCategory.UNKNOWN

    logger.error(
        "Classified %s as %s: %s",
        exc.__class__.__name__,
        category.value,
        exc,
        extra={"error_category": category.value, "status_code": status},
    )
    return AnalysisError(category, details=details)
