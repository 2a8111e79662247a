"""AI Leadership Growth Benchmark service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from leadership_benchmark import __version__
from leadership_benchmark.api.router import router
from leadership_benchmark.database import close_database, init_database
from leadership_benchmark.observability import configure_logging, get_logger
from leadership_benchmark.settings import get_settings

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        None
    """
    # Startup
    configure_logging(settings.log_level, settings.json_logs)
    init_database(settings.database_url, echo=settings.database_echo)
    logger.info("Service started", service_name=settings.service_name, version=__version__)
    yield
    # Shutdown
    await close_database()
    logger.info("Service stopped", service_name=settings.service_name)


app: FastAPI = FastAPI(
    title="AI Leadership Growth Benchmark",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health", tags=["Health"], summary="Liveness check")
async def health() -> dict[str, str]:
    """Report that the process is serving requests."""
    return {"status": "ok", "service": settings.service_name, "version": __version__}


app.include_router(router, prefix="/api/v1")
