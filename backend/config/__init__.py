import logging

from .settings import Settings, get_settings
from .constants import (
    LLM_CONFIG,
    CLAIM_LIMITS,
    RESULT_DEFAULTS,
    PROMPT_CONFIG,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level to the shared logger."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        logger.warning("Unknown LOG_LEVEL %r, keeping INFO.", settings.LOG_LEVEL)
        return
    logging.getLogger().setLevel(level)

__all__ = [
    "logger",
    "Settings",
    "get_settings",
    "configure_logging",
    "LLM_CONFIG",
    "CLAIM_LIMITS",
    "RESULT_DEFAULTS",
    "PROMPT_CONFIG",
]
