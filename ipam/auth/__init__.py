"""
IPAM Authentication

Verifies OIDC bearer tokens (e.g. Keycloak) against the provider's JWKS.
"""

from .authenticator import (
    AuthConfig,
    AuthConfigurationError,
    Authenticator,
    OIDCAuthenticator,
    create_authenticator,
)
from .jwks import JWKSCache, JWKSError, JWKSUnavailableError, SigningKeyNotFoundError
from .middleware import AuthenticationMiddleware, extract_bearer_token, is_public_path
from .principal import Principal, get_principal

__all__ = [
    "AuthConfig",
    "AuthConfigurationError",
    "AuthenticationMiddleware",
    "Authenticator",
    "JWKSCache",
    "JWKSError",
    "JWKSUnavailableError",
    "OIDCAuthenticator",
    "Principal",
    "SigningKeyNotFoundError",
    "create_authenticator",
    "extract_bearer_token",
    "get_principal",
    "is_public_path",
]
