"""FastAPI application factories.

Two applications are served:

- the **API application** (``create_app``): the versioned resource routes
  under ``base_path_prefix``, guarded by HTTP Basic authentication, with
  response validation and request logging
- the **admin application** (``create_admin_app``): build metadata on its
  own port, also behind authentication

Both receive the settings object explicitly and keep it on ``app.state``
together with the collaborators built from it (response validator, data
source), so request handlers never read global configuration.

Middleware run in reverse order of registration.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from loguru import logger

from api_skeleton.api.middleware.error_handler import register_exception_handlers
from api_skeleton.api.middleware.request_context import RequestContextMiddleware
from api_skeleton.api.middleware.request_logging import RequestLoggingMiddleware
from api_skeleton.api.routes import meta, pets
from api_skeleton.api.security import require_authentication
from api_skeleton.api.utils.responses import ORJSONResponse
from api_skeleton.api.validation import ResponseValidator
from api_skeleton.core.config import Settings, get_settings
from api_skeleton.core.logging import setup_logging
from api_skeleton.infrastructure.data_source import DataSourceError, load_pets


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Load the data source before serving requests.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.

    Raises:
        RuntimeError: If the data source cannot be loaded.
    """
    settings: Settings = app_instance.state.settings
    try:
        app_instance.state.pet_repository = load_pets(
            settings.data_source_config.pets_path
        )
    except DataSourceError as exc:
        logger.error("Data source validation failed during startup: {}", exc)
        msg = f"Data source validation failed: {exc}"
        raise RuntimeError(msg) from exc

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown complete")


def _base_app(settings: Settings, title: str, **kwargs: object) -> FastAPI:
    application = FastAPI(
        title=title,
        version=settings.app_version,
        debug=settings.debug,
        default_response_class=ORJSONResponse,
        **kwargs,  # type: ignore[arg-type]
    )
    application.state.settings = settings
    register_exception_handlers(application)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)
    return application


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the API application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    prefix = settings.base_path_prefix
    application = _base_app(
        settings,
        settings.app_name,
        docs_url=settings.docs_url and f"{prefix}{settings.docs_url}",
        redoc_url=settings.redoc_url and f"{prefix}{settings.redoc_url}",
        openapi_url=settings.openapi_url and f"{prefix}{settings.openapi_url}",
        lifespan=lifespan,
    )
    application.state.response_validator = ResponseValidator(
        strict=settings.response_validation_config.strict
    )

    api_router = APIRouter(
        prefix=prefix, dependencies=[Depends(require_authentication)]
    )
    api_router.include_router(pets.router)
    application.include_router(api_router)

    @application.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        """Liveness probe, served without authentication."""
        return {"status": "healthy"}

    return application


def create_admin_app(settings: Settings | None = None) -> FastAPI:
    """Create the admin application serving build metadata.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured admin application.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    application = _base_app(
        settings,
        f"{settings.app_name} admin",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    application.include_router(
        meta.router,
        prefix=settings.base_path_prefix,
        dependencies=[Depends(require_authentication)],
    )
    return application
