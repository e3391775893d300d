"""Pytest configuration and fixtures."""

from typing import Any, Callable
from urllib.parse import parse_qs

import httpx
import pytest

from dish_api.core.config import Settings
from dish_api.services.dish_recognition import RecognitionPipeline, TokenCache, build_pipeline


# Sample test image (1x1 red pixel PNG)
TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)
TINY_PNG_DATA_URI = f"data:image/png;base64,{TINY_PNG_BASE64}"

TOKEN_PATH = "/oauth/2.0/token"
DISH_PATH = "/rest/2.0/image-classify/v2/dish"


class FakeBaidu:
    """
    In-memory stand-in for the Baidu token and dish endpoints.

    Each endpoint replies with ``(status_code, json_body)`` or raises the
    exception returned by its handler. Every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_reply: Callable[[httpx.Request], Any] = lambda request: (
            200,
            {"access_token": "test-token", "expires_in": 2592000},
        )
        self.dish_reply: Callable[[httpx.Request], Any] = lambda request: (
            200,
            {"log_id": 123456789, "result_num": 0, "result": []},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == TOKEN_PATH:
            reply = self.token_reply(request)
        elif request.url.path == DISH_PATH:
            reply = self.dish_reply(request)
        else:
            return httpx.Response(404)

        if isinstance(reply, Exception):
            raise reply
        status_code, body = reply
        if isinstance(body, (dict, list)):
            return httpx.Response(status_code, json=body)
        return httpx.Response(status_code, text=body)

    def respond_dish(self, body: Any, status_code: int = 200) -> None:
        self.dish_reply = lambda request: (status_code, body)

    def respond_token(self, body: Any, status_code: int = 200) -> None:
        self.token_reply = lambda request: (status_code, body)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def dish_form(self, index: int = -1) -> dict[str, str]:
        """Decoded form body of a recorded dish request."""
        request = self.calls_to(DISH_PATH)[index]
        return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


@pytest.fixture
def fake_baidu() -> FakeBaidu:
    return FakeBaidu()


@pytest.fixture
def http_client(fake_baidu: FakeBaidu) -> httpx.AsyncClient:
    """HTTP client routed to the fake provider."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_baidu.handler))


@pytest.fixture
def settings() -> Settings:
    """Configured settings, isolated from the process environment and .env."""
    return Settings(
        _env_file=None,
        baidu_api_key="test-api-key",
        baidu_secret_key="test-secret-key",
        token_cache_enabled=False,
        debug=False,
    )


@pytest.fixture
def pipeline(settings: Settings, http_client: httpx.AsyncClient) -> RecognitionPipeline:
    return build_pipeline(settings, http_client)


@pytest.fixture
def cached_pipeline(settings: Settings, http_client: httpx.AsyncClient) -> RecognitionPipeline:
    return build_pipeline(settings, http_client, cache=TokenCache(expiry_margin_seconds=3600))


@pytest.fixture
def kung_pao_result() -> dict:
    """Single Baidu dish entry."""
    return {"name": "宫保鸡丁", "probability": "0.98", "calorie": "180", "has_calorie": True}
