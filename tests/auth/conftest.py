"""Key material and JWKS endpoints for authentication tests"""

import time
from collections.abc import Callable

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from ipam.auth import AuthConfig

ISSUER = "https://idp.example.com/realms/ipam"
AUDIENCE = "ipam-api"
JWKS_URL = f"{ISSUER}/protocol/openid-connect/certs"


def generate_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def public_jwk(private_key: rsa.RSAPrivateKey, kid: str, use: str = "sig") -> dict:
    jwk = RSAAlgorithm.to_jwk(private_key.public_key(), as_dict=True)
    jwk.update({"kid": kid, "use": use, "alg": "RS256"})
    return jwk


def make_token(
    private_key: rsa.RSAPrivateKey,
    kid: str | None = "key-1",
    issuer: str = ISSUER,
    audience: str | None = AUDIENCE,
    subject: str = "user-123",
    expires_in: int = 300,
    algorithm: str = "RS256",
) -> str:
    now = int(time.time())
    claims = {"iss": issuer, "sub": subject, "iat": now, "exp": now + expires_in}
    if audience is not None:
        claims["aud"] = audience
    headers = {"kid": kid} if kid is not None else {}
    return jwt.encode(claims, private_key, algorithm=algorithm, headers=headers)


class JWKSEndpoint:
    """Serves a mutable JWKS document and records requests"""

    def __init__(self, keys: list[dict], status_code: int = 200):
        self.keys = keys
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"keys": self.keys})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture(scope="session")
def signing_key() -> rsa.RSAPrivateKey:
    return generate_key()


@pytest.fixture(scope="session")
def untrusted_key() -> rsa.RSAPrivateKey:
    return generate_key()


@pytest.fixture
def jwks_endpoint(signing_key) -> JWKSEndpoint:
    return JWKSEndpoint([public_jwk(signing_key, "key-1")])


@pytest.fixture
def token_factory(signing_key) -> Callable[..., str]:
    def factory(**kwargs) -> str:
        return make_token(kwargs.pop("key", signing_key), **kwargs)

    return factory


@pytest.fixture
def jwk_factory() -> Callable[..., dict]:
    return public_jwk


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(enabled=True, issuer=ISSUER, audience=AUDIENCE)
