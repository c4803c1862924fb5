from datetime import date, datetime
from typing import Optional, Union

from config import logger
from config.settings import Settings
from exceptions import AnalysisError, ErrorCategory
from models.verdicts import AnalysisResult
from prompts import build_fact_check_prompt
from .errors import classify_failure
from .llm import GeminiTransport, GenerationOptions, web_search_tools
from .normalizer import normalize_reply


class FactCheckService:

    def __init__(self, transport: GeminiTransport, options: Optional[GenerationOptions] = None):
        self.transport = transport
        self.options = options or GenerationOptions()

    async def analyze_claim(
        self,
        claim: str,
        current_date: Optional[Union[date, datetime, str]] = None
    ) -> AnalysisResult:
        """
        Verify a claim with the model and return the validated result.
        Args:
            claim: The claim to verify, already validated by the caller
            current_date: Date stated in the prompt, defaults to today
        Returns:
            AnalysisResult; any failure is raised as a classified AnalysisError
        """
        try:
            prompt = build_fact_check_prompt(claim, current_date or date.today())
        except (ValueError, TypeError) as e:
            logger.error("Could not build prompt: %s", e)
            raise classify_failure(e) from e

        try:
            raw = await self.transport.generate(prompt, self.options)
        except Exception as e:
            logger.error("API call failed: %s", e)
            raise classify_failure(e, during_transport=True) from e

        try:
            return await normalize_reply(raw)
        except AnalysisError:
            raise
        except Exception as e:
            logger.exception("Unexpected error while normalizing Gemini reply.")
            raise classify_failure(e) from e


def create_fact_check_service(settings: Settings) -> FactCheckService:
    """Validate credentials and build the service. Raises a CONFIGURATION AnalysisError."""
    if not settings.GEMINI_API_KEY or not settings.GEMINI_API_KEY.strip():
        logger.critical("GEMINI_API_KEY not configured.")
        raise AnalysisError(ErrorCategory.CONFIGURATION, details={"missing": "GEMINI_API_KEY"})

    try:
        transport = GeminiTransport(
            api_key=settings.GEMINI_API_KEY.strip(),
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.GEMINI_REQUEST_TIMEOUT,
        )
    except Exception as e:
        logger.exception("Failed to initialize Gemini transport.")
        raise AnalysisError(
            ErrorCategory.CONFIGURATION,
            "Failed to initialize AI service. Please check your API key and try again.",
            {"reason": str(e)},
        ) from e

    options = GenerationOptions(
        temperature=settings.GEMINI_TEMPERATURE,
        tools=web_search_tools() if settings.GEMINI_ALLOW_WEB_SEARCH else None,
    )
    logger.info(
        "Fact-check service ready: model=%s, web_search=%s",
        settings.GEMINI_MODEL,
        settings.GEMINI_ALLOW_WEB_SEARCH,
    )
    return FactCheckService(transport, options)
