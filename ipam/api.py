"""
IPAM FastAPI Application

REST API for subnets and the IP addresses recorded in them.

Provides:
- Subnets: list, create, get, delete
- IP addresses: record, list, rename, delete (always under their subnet)
- Liveness and readiness probes
"""

from contextlib import asynccontextmanager

import structlog  # type: ignore[import-untyped]
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import AuthConfig, AuthenticationMiddleware, create_authenticator
from .config import Settings, get_settings
from .core.exceptions import ConfigurationError
from .core.interfaces import IHealthChecker, IIPRepository, ISubnetRepository
from .infrastructure.persistence.memory import (
    InMemoryHealthChecker,
    InMemoryIPRepository,
    InMemoryStore,
    InMemorySubnetRepository,
)
from .infrastructure.persistence.postgres import (
    PostgresHealthChecker,
    PostgresIPRepository,
    PostgresSubnetRepository,
    get_engine,
    get_session_factory,
)
from .routes import health, ips, subnets
from .routes.dependencies import get_authenticator, init_services, reset_services
from .services import NetworkService, with_logging

logger = structlog.get_logger()

# Documents the bearer scheme in OpenAPI; enforcement is done by AuthenticationMiddleware.
bearer_scheme = HTTPBearer(auto_error=False, description="OIDC access token")


def build_storage(
    settings: Settings,
) -> tuple[ISubnetRepository, IIPRepository, IHealthChecker, AsyncEngine | None]:
    """
    Create the repositories for the configured storage backend

    Returns:
        Subnet repository, IP repository, health checker and the database
        engine (None for the memory backend)

    Raises:
        ConfigurationError: If the postgres backend has no database URL
    """
    if settings.storage_backend == "memory":
        store = InMemoryStore()
        return (
            InMemorySubnetRepository(store),
            InMemoryIPRepository(store),
            InMemoryHealthChecker(),
            None,
        )

    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL (or DB_CONN) is required for postgres storage")

    engine = get_engine(settings.database_url)
    session_factory = get_session_factory(engine)
    return (
        PostgresSubnetRepository(session_factory),
        PostgresIPRepository(session_factory),
        PostgresHealthChecker(engine),
        engine,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager"""
    settings: Settings = app.state.settings
    engine: AsyncEngine | None = None
    authenticator = None

    try:
        # Startup
        subnet_repository, ip_repository, health_checker, engine = build_storage(settings)
        authenticator = await create_authenticator(AuthConfig.from_settings(settings))

        network_service = with_logging(
            NetworkService(subnet_repository, ip_repository),
            structlog.get_logger(),
        )
        init_services(network_service, health_checker, authenticator)

        logger.info(
            "ipam_started",
            storage_backend=settings.storage_backend,
            auth_enabled=authenticator is not None,
            port=settings.port,
        )

        yield
    finally:
        # Shutdown (also runs when startup failed part way)
        reset_services()
        if authenticator is not None:
            await authenticator.aclose()
        if engine is not None:
            await engine.dispose()
        logger.info("ipam_stopped")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("request_validation_failed", path=request.url.path, errors=exc.errors())
    return JSONResponse(status_code=400, content={"error": "bad request"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application"""
    settings = settings or get_settings()

    app = FastAPI(
        title="IPAM - IP Address Management",
        description="Subnets and IP addresses behind an OIDC-authenticated API",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Middleware added last runs first: CORS wraps the authentication gate
    app.add_middleware(AuthenticationMiddleware, authenticator_provider=get_authenticator)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(subnets.router, dependencies=[Depends(bearer_scheme)])
    app.include_router(ips.router, dependencies=[Depends(bearer_scheme)])

    return app


app = create_app()
