"""
Baidu access token acquisition and caching.

Tokens are exchanged for the long-lived API key / secret pair via the OAuth
client-credentials endpoint. Without a cache every pipeline run pays the token
round trip; with a TokenCache the token is shared process-wide until it nears
expiry or the provider rejects it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

import httpx

from dish_api.core.exceptions import CredentialError
from dish_api.models.recognition import AccessToken

logger = logging.getLogger(__name__)


CacheKey = tuple[str, str]


class TokenCache:
    """
    Process-wide token slots keyed by credential pair.

    Acquisition for a key is serialized by a per-key lock, so concurrent
    requests wait for a single round trip instead of each fetching a token.
    """

    def __init__(self, expiry_margin_seconds: int = 3600):
        self.expiry_margin_seconds = expiry_margin_seconds
        self._tokens: dict[CacheKey, AccessToken] = {}
        self._locks: dict[CacheKey, asyncio.Lock] = {}

    def _lock_for(self, key: CacheKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def peek(self, key: CacheKey, now: datetime | None = None) -> AccessToken | None:
        """Return the cached token if it is still fresh."""
        token = self._tokens.get(key)
        if token is None or token.is_expired(self.expiry_margin_seconds, now=now):
            return None
        return token

    async def get_or_acquire(
        self,
        key: CacheKey,
        acquire: Callable[[], Awaitable[AccessToken]],
    ) -> AccessToken:
        """Return a fresh cached token, acquiring one under the key's lock if needed."""
        token = self.peek(key)
        if token is not None:
            return token

        async with self._lock_for(key):
            # Another task may have refreshed the slot while we waited
            token = self.peek(key)
            if token is not None:
                return token

            token = await acquire()
            self._tokens[key] = token
            return token

    def invalidate(self, key: CacheKey) -> None:
        """Drop the cached token for a key."""
        self._tokens.pop(key, None)


class CredentialManager:
    """Obtains Baidu access tokens, optionally through a TokenCache."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_url: str = "https://aip.baidubce.com/oauth/2.0/token",
        cache: TokenCache | None = None,
    ):
        """
        Initialize the credential manager.

        Args:
            client: Shared HTTP client
            token_url: OAuth token endpoint
            cache: Optional token cache; None means a fresh token per call
        """
        self._client = client
        self.token_url = token_url
        self.cache = cache

    async def acquire_token(self, client_id: str, client_secret: str) -> AccessToken:
        """
        Exchange the client credentials for a new access token.

        Raises:
            CredentialError: On transport failure, non-2xx status, or a body
                without a usable access_token
        """
        params = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }

        logger.info("Requesting Baidu access token")

        try:
            response = await self._client.post(
                self.token_url,
                params=params,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error(f"Access token request failed: {e}")
            raise CredentialError(f"failed to obtain access token: {e}") from e

        if not response.is_success:
            logger.error(f"Access token request failed: HTTP {response.status_code}")
            raise CredentialError(
                "failed to obtain access token",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CredentialError("access token response is not valid JSON") from e

        value = data.get("access_token") if isinstance(data, dict) else None
        if not value:
            # Body carries error/error_description, never the secret
            logger.error(f"Access token missing from response: {data}")
            raise CredentialError("access token invalid", status_code=response.status_code)

        expires_in = data.get("expires_in")
        token = AccessToken(
            value=value,
            expires_in=int(expires_in) if expires_in is not None else None,
        )

        logger.info("Access token obtained")
        return token

    async def get_token(self, client_id: str, client_secret: str) -> AccessToken:
        """Return a usable token, reusing a cached one when caching is enabled."""
        if self.cache is None:
            return await self.acquire_token(client_id, client_secret)

        return await self.cache.get_or_acquire(
            (client_id, client_secret),
            lambda: self.acquire_token(client_id, client_secret),
        )

    def invalidate(self, client_id: str, client_secret: str) -> None:
        """Forget the cached token for a credential pair."""
        if self.cache is not None:
            logger.info("Invalidating cached access token")
            self.cache.invalidate((client_id, client_secret))
