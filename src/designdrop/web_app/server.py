from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from ..config import Settings, config
from ..pipeline import SubmissionPipeline
from .routes import admin, upload

logger = logging.getLogger(__name__)


def _mount_frontend(app: FastAPI, frontend_dir: Path) -> None:
    """Отдавать собранный фронтенд; неизвестные пути получают ``index.html``."""
    root = frontend_dir.resolve()
    index_path = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        candidate = (root / full_path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if index_path.is_file():
            return FileResponse(index_path)
        raise HTTPException(status_code=404, detail="Not Found")


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[SubmissionPipeline] = None,
) -> FastAPI:
    """Собрать приложение FastAPI с конвейером, построенным из ``settings``."""
    settings = settings or config
    app = FastAPI(title="designdrop")
    app.state.settings = settings
    app.state.pipeline = pipeline or SubmissionPipeline.from_settings(settings)
    request_limit = settings.request_size_limit()

    @app.middleware("http")
    async def limit_upload_size(request: Request, call_next):
        """Отклонить загрузку по ``Content-Length`` до разбора multipart-тела."""
        if request.method == "POST" and request.url.path == "/upload":
            length = request.headers.get("content-length", "")
            if length.isdigit() and int(length) > request_limit:
                logger.warning(
                    "Upload rejected: Content-Length %s exceeds %s bytes", length, request_limit
                )
                return JSONResponse(
                    status_code=413,
                    content={"detail": f"Upload exceeds {request_limit} bytes"},
                )
        return await call_next(request)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(upload.router)
    app.include_router(admin.router)

    if settings.frontend_dir:
        frontend_dir = Path(settings.frontend_dir)
        if frontend_dir.is_dir():
            _mount_frontend(app, frontend_dir)
        else:
            logger.warning(
                "Frontend directory %s does not exist; static files will not be served.",
                frontend_dir,
            )
    return app


app = create_app()
