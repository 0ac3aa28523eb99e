"""
IPAM process entry point

Configures logging and serves the API with uvicorn. On SIGINT/SIGTERM
uvicorn stops accepting connections and waits up to
``shutdown_grace_period`` seconds for in-flight requests before the
application lifespan releases the key cache and the database pool.
"""

import uvicorn

from .config import get_settings
from .log_config import configure_logging


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    uvicorn.run(
        "ipam.api:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_period,
    )


if __name__ == "__main__":
    run()
