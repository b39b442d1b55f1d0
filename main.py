"""Main entry point: serves the API and admin applications with uvicorn."""

import asyncio
import os

import uvicorn
from loguru import logger

from api_skeleton.api.main import create_admin_app, create_app
from api_skeleton.core.config import Settings, get_settings
from api_skeleton.core.logging import setup_logging, uvicorn_log_config


def build_server_config(
    app: object, settings: Settings, port: int
) -> uvicorn.Config:
    """Uvicorn configuration for one of the applications.

    Args:
        app: The ASGI application.
        settings: Application settings.
        port: Port to listen on.

    Returns:
        uvicorn.Config: Server configuration, with TLS when configured.
    """
    tls = settings.tls_config
    return uvicorn.Config(
        app,
        host=settings.api_host,
        port=port,
        log_config=uvicorn_log_config(),
        ssl_keyfile=str(tls.key_path) if tls.key_path else None,
        ssl_certfile=str(tls.cert_path) if tls.cert_path else None,
    )


async def serve(settings: Settings) -> None:
    """Run both servers until either stops."""
    # Container platforms may assign the API port through PORT
    api_port = int(os.environ.get("PORT", settings.api_port))
    scheme = "https" if settings.tls_config.enabled else "http"

    api_server = uvicorn.Server(
        build_server_config(create_app(settings), settings, api_port)
    )
    admin_server = uvicorn.Server(
        build_server_config(create_admin_app(settings), settings, settings.admin_port)
    )

    logger.info(
        "Starting API on {}://{}:{} and admin API on port {}",
        scheme,
        settings.api_host,
        api_port,
        settings.admin_port,
    )
    await asyncio.gather(api_server.serve(), admin_server.serve())


def main() -> None:
    """Main entry point for the application."""
    settings = get_settings()
    setup_logging(settings)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
