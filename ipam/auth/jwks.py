"""
JSON Web Key Set cache

Holds the identity provider's signing keys indexed by key id. Keys are
reloaded in a background task; a token carrying an unknown key id triggers
at most one extra reload per ``min_refresh_interval`` so that key rotation
is picked up without letting bad tokens hammer the provider.
"""

import asyncio
import contextlib
import time

import httpx
import jwt
import structlog  # type: ignore[import-untyped]

from ..core.exceptions import IPAMException

logger = structlog.get_logger()


class JWKSError(IPAMException):
    """Key set could not be used"""

    pass


class JWKSUnavailableError(JWKSError):
    """Key set endpoint unreachable or returned an unusable document"""

    pass


class SigningKeyNotFoundError(JWKSError):
    """No key in the set matches the token's key id"""

    pass


async def ensure_jwks_reachable(client: httpx.AsyncClient, jwks_url: str) -> None:
    """
    Probe the JWKS endpoint once

    Raises:
        JWKSUnavailableError: On a transport error or a non-200 response
    """
    try:
        response = await client.get(jwks_url)
    except httpx.HTTPError as e:
        raise JWKSUnavailableError(str(e) or type(e).__name__) from e

    if response.status_code != 200:
        raise JWKSUnavailableError(f"jwks endpoint returned {response.status_code}")


class JWKSCache:
    """Signing key cache for a single JWKS endpoint"""

    def __init__(
        self,
        jwks_url: str,
        http_client: httpx.AsyncClient | None = None,
        owns_client: bool | None = None,
        refresh_interval: float = 3600.0,
        min_refresh_interval: float = 300.0,
        timeout: float = 10.0,
    ):
        self.jwks_url = jwks_url
        self.refresh_interval = refresh_interval
        self.min_refresh_interval = min_refresh_interval

        self._owns_client = http_client is None if owns_client is None else owns_client
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._keys: dict[str | None, jwt.PyJWK] = {}
        self._last_refresh: float | None = None
        self._refresh_lock = asyncio.Lock()
        self._refresh_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Load the key set and start background refresh"""
        await self.refresh()
        if self._refresh_task is None and self.refresh_interval > 0:
            self._refresh_task = asyncio.create_task(self._refresh_loop())

    async def aclose(self) -> None:
        """Stop background refresh and release the HTTP client"""
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._refresh_task
            self._refresh_task = None
        if self._owns_client:
            await self._client.aclose()

    async def refresh(self) -> None:
        """
        Fetch the key set and replace the cached keys

        Raises:
            httpx.HTTPError: If the endpoint cannot be fetched
            jwt.PyJWKSetError: If the document holds no usable keys
        """
        async with self._refresh_lock:
            response = await self._client.get(self.jwks_url)
            response.raise_for_status()

            # Encryption keys published alongside signing keys are ignored
            signing_jwks = [
                jwk
                for jwk in response.json().get("keys", [])
                if jwk.get("use") in (None, "sig")
            ]
            if not signing_jwks:
                raise JWKSUnavailableError("jwks contains no signing keys")

            keys = {key.key_id: key for key in jwt.PyJWKSet(signing_jwks).keys}

            self._keys = keys
            self._last_refresh = time.monotonic()
            logger.debug("jwks_refreshed", jwks_url=self.jwks_url, key_count=len(keys))

    async def get_signing_key(self, kid: str | None) -> jwt.PyJWK:
        """
        Resolve the key for a token's ``kid`` header

        A token without ``kid`` is accepted only when the set holds one key.

        Raises:
            SigningKeyNotFoundError: If no key matches
        """
        key = self._lookup(kid)
        if key is None and self._may_refresh():
            try:
                await self.refresh()
            except (httpx.HTTPError, jwt.PyJWKSetError, JWKSError, ValueError) as e:
                logger.warning("jwks_refresh_failed", jwks_url=self.jwks_url, error=str(e))
            key = self._lookup(kid)
        if key is None:
            raise SigningKeyNotFoundError(f"no signing key for kid {kid!r}")
        return key

    def _lookup(self, kid: str | None) -> jwt.PyJWK | None:
        keys = self._keys
        if kid is None and len(keys) == 1:
            return next(iter(keys.values()))
        return keys.get(kid)

    def _may_refresh(self) -> bool:
        if self._last_refresh is None:
            return True
        return time.monotonic() - self._last_refresh >= self.min_refresh_interval

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            try:
                await self.refresh()
            except (httpx.HTTPError, jwt.PyJWKSetError, JWKSError, ValueError) as e:
                logger.warning("jwks_refresh_failed", jwks_url=self.jwks_url, error=str(e))
