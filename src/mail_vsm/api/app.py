"""
FastAPI application exposing the classifier service.

The app owns one VSMClassifierService; routes reach it through the
``get_service`` dependency so tests can build apps around their own service.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from ..version import API_VERSION, get_current_pipeline_version
from ..config import settings
from ..logging_config import setup_logging
from ..classification.service import VSMClassifierService
from .routes import health, version, classification, model
from .middleware import setup_logging_middleware, setup_error_handling_middleware

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    service: VSMClassifierService = app.state.classifier
    logger.info(
        "Starting VSM classifier API",
        version=API_VERSION,
        pipeline=get_current_pipeline_version().to_repr(),
        log_level=settings.log_level,
        model_state=service.state,
        vocabulary_size=service.vocabulary_size,
    )
    yield
    service.shutdown(wait=True)
    logger.info("Shutting down VSM classifier API")


def create_app(service: Optional[VSMClassifierService] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        service: Classifier to serve (default: one loaded from settings.model_path)

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Email VSM Classifier",
        description="Vector space model email classification with incremental centroid learning",
        version=API_VERSION,
        pipeline=get_current_pipeline_version().to_repr(),
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.classifier = service or VSMClassifierService(artifact_path=settings.model_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # first added = outermost
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(classification.router, tags=["Classification"])
    app.include_router(model.router, tags=["Model"])

    return app


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, use uvicorn directly.
    """
    import uvicorn

    uvicorn.run(
        "mail_vsm.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
