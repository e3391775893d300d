"""
Factory for the dish recognition pipeline.

Builds the pipeline from settings and owns the shared HTTP client and token
cache, which live for the whole process.
"""

import logging
from functools import lru_cache

import httpx

from dish_api.core.config import Settings, get_settings

from .client import BaiduDishClient
from .credentials import CredentialManager, TokenCache
from .pipeline import RecognitionPipeline

logger = logging.getLogger(__name__)


_http_client: httpx.AsyncClient | None = None


def get_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Get or create the shared HTTP client for provider calls."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        settings = settings or get_settings()
        _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))
    return _http_client


def build_pipeline(
    settings: Settings,
    client: httpx.AsyncClient,
    cache: TokenCache | None = None,
) -> RecognitionPipeline:
    """Assemble a pipeline from explicit settings and collaborators."""
    credentials = CredentialManager(
        client,
        token_url=settings.baidu_token_url,
        cache=cache,
    )
    dish_client = BaiduDishClient(client, dish_url=settings.baidu_dish_url)
    return RecognitionPipeline(settings, credentials, dish_client)


@lru_cache(maxsize=1)
def get_recognition_pipeline() -> RecognitionPipeline:
    """
    Get the configured recognition pipeline.

    Missing credentials do not fail here; the pipeline reports them per request
    as a configuration error.
    """
    settings = get_settings()

    cache = None
    if settings.token_cache_enabled:
        cache = TokenCache(expiry_margin_seconds=settings.token_expiry_margin_seconds)

    if not settings.is_provider_configured:
        logger.warning("BAIDU_API_KEY / BAIDU_SECRET_KEY not set, recognition will fail")

    logger.info(
        f"Initializing dish recognition pipeline "
        f"(token cache {'on' if cache else 'off'}, portion {settings.portion_weight_grams}g)"
    )
    return build_pipeline(settings, get_http_client(settings), cache=cache)


async def close_http_client() -> None:
    """Close the shared HTTP client and drop the cached pipeline."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
    get_recognition_pipeline.cache_clear()
