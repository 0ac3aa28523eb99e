"""
Bearer token authentication against an OIDC identity provider

``create_authenticator`` runs once at startup. When authentication is
enabled it checks the configuration, probes the provider's JWKS endpoint
and loads the key cache, failing fast if anything is wrong so the process
never starts serving requests it cannot authenticate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx
import jwt
import structlog  # type: ignore[import-untyped]

from ..config import Settings
from ..core.exceptions import IPAMException, InvalidTokenException
from .jwks import JWKSCache, JWKSError, JWKSUnavailableError, ensure_jwks_reachable
from .principal import Principal

logger = structlog.get_logger()

# Signature algorithms accepted from the identity provider. Symmetric
# algorithms are excluded: the JWKS only ever carries public keys.
ALLOWED_ALGORITHMS = (
    "RS256",
    "RS384",
    "RS512",
    "PS256",
    "PS384",
    "PS512",
    "ES256",
    "ES384",
    "ES512",
    "EdDSA",
)

DEFAULT_LEEWAY = 5.0  # seconds


class AuthConfigurationError(IPAMException):
    """Authentication is enabled but not usable as configured"""

    pass


@dataclass(frozen=True)
class AuthConfig:
    enabled: bool = False
    issuer: str | None = None
    audience: str | None = None
    jwks_url: str | None = None
    probe_timeout: float = 10.0
    refresh_interval: float = 3600.0
    leeway: float = DEFAULT_LEEWAY

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            enabled=settings.auth_enabled,
            issuer=settings.auth_issuer,
            audience=settings.auth_audience,
            jwks_url=settings.auth_jwks_url,
            probe_timeout=settings.jwks_probe_timeout,
            refresh_interval=settings.jwks_refresh_interval,
        )

    def resolved_jwks_url(self) -> str:
        """Explicit JWKS URL, or the Keycloak certs endpoint under the issuer"""
        if self.jwks_url:
            return self.jwks_url
        return f"{(self.issuer or '').rstrip('/')}/protocol/openid-connect/certs"


class Authenticator(ABC):
    @abstractmethod
    async def authenticate(self, bearer_token: str) -> Principal:
        """
        Verify a bearer token

        Raises:
            InvalidTokenException: If the token is rejected for any reason
        """
        pass

    async def aclose(self) -> None:
        return None


class OIDCAuthenticator(Authenticator):
    """Verifies signed JWTs with keys from a JWKS cache"""

    def __init__(
        self,
        key_set: JWKSCache,
        issuer: str | None = None,
        audience: str | None = None,
        leeway: float = DEFAULT_LEEWAY,
    ):
        self.key_set = key_set
        self.issuer = issuer or None
        self.audience = audience or None
        self.leeway = leeway

    async def authenticate(self, bearer_token: str) -> Principal:
        try:
            header = jwt.get_unverified_header(bearer_token)
            signing_key = await self.key_set.get_signing_key(header.get("kid"))

            # The key decides the algorithm; the token header must agree with it
            algorithm = signing_key.algorithm_name
            if algorithm not in ALLOWED_ALGORITHMS:
                raise jwt.InvalidAlgorithmError(f"algorithm {algorithm!r} not allowed")
            if header.get("alg") != algorithm:
                raise jwt.InvalidAlgorithmError(
                    f"token algorithm {header.get('alg')!r} does not match key {algorithm!r}"
                )

            claims = jwt.decode(
                bearer_token,
                key=signing_key.key,
                algorithms=[algorithm],
                issuer=self.issuer,
                audience=self.audience,
                leeway=self.leeway,
                options={"verify_aud": self.audience is not None},
            )
        except (jwt.PyJWTError, JWKSError, TypeError, ValueError) as e:
            # Callers only ever see InvalidTokenException; the reason stays in debug logs.
            logger.debug("token_rejected", reason=type(e).__name__, error=str(e))
            raise InvalidTokenException() from None

        return Principal.from_claims(claims)

    async def aclose(self) -> None:
        await self.key_set.aclose()


async def create_authenticator(
    config: AuthConfig,
    http_client: httpx.AsyncClient | None = None,
) -> Authenticator | None:
    """
    Build the authenticator for the process

    Args:
        config: Authentication settings
        http_client: Optional client for JWKS requests; one is created otherwise

    Returns:
        None when authentication is disabled

    Raises:
        AuthConfigurationError: If enabled without an issuer (no network call is made)
        JWKSUnavailableError: If the JWKS endpoint cannot be reached or loaded
    """
    if not config.enabled:
        return None
    if not config.issuer:
        raise AuthConfigurationError("auth enabled but issuer is empty")

    jwks_url = config.resolved_jwks_url()
    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(timeout=config.probe_timeout)

    key_set = JWKSCache(
        jwks_url,
        http_client=client,
        owns_client=owns_client,
        refresh_interval=config.refresh_interval,
    )
    try:
        await ensure_jwks_reachable(client, jwks_url)
        await key_set.start()
    except (JWKSError, httpx.HTTPError, jwt.PyJWKSetError, ValueError) as e:
        await key_set.aclose()
        raise JWKSUnavailableError(f"fetch jwks from {jwks_url}: {e}") from e

    logger.info(
        "auth_enabled",
        issuer=config.issuer,
        audience=config.audience,
        jwks_url=jwks_url,
    )
    return OIDCAuthenticator(
        key_set,
        issuer=config.issuer,
        audience=config.audience,
        leeway=config.leeway,
    )
