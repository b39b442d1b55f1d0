"""Build metadata served by the admin application."""

import asyncio
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request
from loguru import logger

from api_skeleton.api.constants import META_TIME_FORMAT
from api_skeleton.core.config import Settings

router = APIRouter(tags=["admin"])


class RevisionLookupError(RuntimeError):
    """The current source revision could not be determined."""


async def get_revision() -> str:
    """Return the short git revision of the running code.

    Raises:
        RevisionLookupError: If git is unavailable or the lookup fails.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            "rev-parse",
            "--short",
            "HEAD",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        msg = f"Cannot run git: {exc}"
        raise RevisionLookupError(msg) from exc

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        msg = f"git rev-parse failed: {stderr.decode().strip()}"
        raise RevisionLookupError(msg)
    return stdout.decode().strip()


@router.get("", response_model=None)
async def get_meta(request: Request) -> dict[str, Any]:
    """Return the API name, server time and source revision.

    Returns:
        dict[str, Any]: ``{"meta": {...}}`` document.
    """
    settings: Settings = request.app.state.settings
    commit = await get_revision()
    now = datetime.now().astimezone()

    logger.debug("Serving meta information", commit=commit)
    return {
        "meta": {
            "name": settings.app_name,
            "time": now.strftime(META_TIME_FORMAT),
            "unixTime": int(now.timestamp()),
            "commit": commit,
            "documentation": (
                f"{settings.base_path_prefix}{settings.openapi_url}"
                if settings.openapi_url
                else None
            ),
        }
    }
