import pytest
import sys
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock the Gemini environment variables."""
    env_vars = {
        "GEMINI_API_KEY": "test_gemini_key",
        "GEMINI_MODEL": "gemini-2.5-pro",
        "GEMINI_ALLOW_WEB_SEARCH": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    from config.settings import get_settings
    get_settings.cache_clear()
    yield env_vars
    get_settings.cache_clear()


@pytest.fixture
def mock_service():
    """A FactCheckService stand-in whose analyze_claim is an AsyncMock."""
    service = MagicMock()
    service.analyze_claim = AsyncMock()
    return service


@pytest.fixture
def test_client(mock_env_vars, mock_service):
    """Create a TestClient for the FastAPI app with the service overridden."""
    import main
    main.app.dependency_overrides[main.get_fact_check_service] = lambda: mock_service
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient for API calls."""
    mock_client = MagicMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def sample_reply_text():
    return '{"verdict": "FALSE", "summary": "S", "reasoning": "R"}'


@pytest.fixture
def sample_gemini_response():
    """Sample Gemini REST response with grounding metadata."""
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "text": '```json\n{"verdict": "LIKELY TRUE", "summary": "Mostly accurate.", '
                                    '"reasoning": "Step one.\\nStep two.", "sources": ['
                                    '{"uri": "https://example.org/a", "title": "A", "published": "2024-05-01"}]}\n```'
                        }
                    ]
                },
                "groundingMetadata": {
                    "groundingChunks": [
                        {"web": {"uri": "https://example.org/a", "title": "A first"}},
                        {"web": {"uri": "https://example.org/b", "title": "B"}},
                        {"web": {"uri": "https://example.org/a", "title": "A second"}},
                        {"retrievedContext": {"uri": "gs://bucket/doc"}},
                        {"web": {"uri": "https://example.org/untitled"}},
                    ]
                },
            }
        ]
    }
