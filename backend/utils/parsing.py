import re
from typing import Optional

# Whole-string match only; backticks inside otherwise plain JSON are left alone.
FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def strip_code_fence(text: Optional[str]) -> str:
    """Return the inner content when the entire text is a fenced code block."""
    if not text:
        return ""
    text = text.strip()
    match = FENCED_BLOCK_PATTERN.fullmatch(text)
    if match:
        return match.group(1)
    return text


def truncate_for_log(text: Optional[str], limit: int) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + f"... [{len(text) - limit} more chars]"
