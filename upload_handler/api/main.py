"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, File, HTTPException, UploadFile, status
from prometheus_client import make_asgi_app
from pydantic import BaseModel

from upload_handler.api.auth import InternalAuthDependency
from upload_handler.config.settings import Settings, get_settings
from upload_handler.imgproc.errors import PersistFailed
from upload_handler.integrations import run_all_checks, warn_missing_dependencies
from upload_handler.monitoring.logging import configure_logging
from upload_handler.services.renditions import RenditionGenerator
from upload_handler.services.uploads import UploadedFile, UploadHandler
from upload_handler.storage.backend import LocalStorage

logger = logging.getLogger(__name__)


class UploadResponse(BaseModel):
    file: str
    url: str
    type: str
    renditions: list[str]


class DependencyStatus(BaseModel):
    name: str
    success: bool
    message: str


def create_app(settings: Settings | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings)

    storage = LocalStorage(settings.media_root, settings.media_url)
    handler = UploadHandler(settings)
    renditions = RenditionGenerator(handler, settings.intermediate_sizes)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await warn_missing_dependencies(settings)
        yield

    app = FastAPI(
        title="Upload Handler API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.mount("/metrics", make_asgi_app())

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get(
        "/health/dependencies",
        tags=["system"],
        response_model=list[DependencyStatus],
        dependencies=[InternalAuthDependency],
    )
    async def dependency_check() -> list[DependencyStatus]:
        """Report whether the optimizer binaries can be executed."""

        results = await run_all_checks(settings)
        return [
            DependencyStatus(name=result.name, success=result.success, message=result.message)
            for result in results
        ]

    @app.post(
        "/uploads",
        tags=["media"],
        response_model=UploadResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def upload_media(file: UploadFile = File(...)) -> UploadResponse:
        """Store an upload, fix its orientation and optimize it with its renditions."""

        data = await file.read()
        if not data:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty upload.")

        path = await asyncio.to_thread(storage.save, file.filename or "upload", data)
        record = UploadedFile(
            file=str(path),
            url=storage.url_for(path),
            type=file.content_type or "application/octet-stream",
        )

        try:
            record = await asyncio.to_thread(handler.handle_upload, record)
        except PersistFailed as exc:
            logger.error("Upload %s could not be rewritten: %s", record.file, exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to store the processed image.",
            ) from exc

        created = await asyncio.to_thread(renditions.generate, record.file)
        return UploadResponse(
            file=record.file,
            url=record.url,
            type=record.type,
            renditions=[storage.url_for(path) for path in created],
        )

    return app


app = create_app()
