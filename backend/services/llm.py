from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from config import logger
from config.constants import LLM_CONFIG


@dataclass(frozen=True)
class GenerationOptions:
    temperature: float = LLM_CONFIG.DEFAULT_TEMPERATURE
    tools: Optional[List[Dict[str, Any]]] = None


def web_search_tools() -> List[Dict[str, Any]]:
    """Tool declaration enabling Gemini's live Google Search grounding."""
    return [{"google_search": {}}]


class GeminiTransport:
    """Posts prompts to the Gemini generateContent endpoint and returns the raw envelope."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: float = LLM_CONFIG.REQUEST_TIMEOUT,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        if not model:
            raise ValueError("model is required")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def build_body(self, prompt: str, options: GenerationOptions) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": options.temperature},
        }
        if options.tools:
            body["tools"] = options.tools
        return body

    async def generate(self, prompt: str, options: Optional[GenerationOptions] = None) -> Dict[str, Any]:
        options = options or GenerationOptions()
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        body = self.build_body(prompt, options)

        logger.info("Calling Gemini model %s (tools=%s)", self.model, bool(options.tools))
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Gemini HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text)
            raise
        except httpx.RequestError as e:
            logger.error("Gemini request error: %s", str(e))
            raise

        logger.info("Gemini call successful")
        return data
