from .parsing import strip_code_fence, truncate_for_log
from .validation import InputValidator

__all__ = [
    "strip_code_fence",
    "truncate_for_log",
    "InputValidator",
]
