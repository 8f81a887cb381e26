from __future__ import annotations

import logging

from fastapi import FastAPI

from harvester import __version__
from harvester.config import get_app_settings


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the API or CLI process.
    """

    log_level = (level or get_app_settings().log_level).strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    configure_logging()
    settings = get_app_settings()

    application = FastAPI(title=settings.title, version=__version__)

    from harvester.api.routers import snapshot_router

    application.include_router(snapshot_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
