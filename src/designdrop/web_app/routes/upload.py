from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from ...errors import SubmissionError
from ...models import UploadResponse
from ...pipeline import SubmissionPipeline
from ...receiver import client_address, receive_files
from ..deps import get_pipeline

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/upload", response_model=UploadResponse)
async def upload_files(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    file: Optional[List[UploadFile]] = File(None),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
):
    """Принять файлы формы, собрать архив и разослать письма."""
    logger.info("Upload endpoint hit")
    settings = pipeline.settings
    try:
        files = await receive_files(
            file,
            max_files=settings.max_files,
            max_file_bytes=settings.max_file_bytes,
            max_total_bytes=settings.max_total_bytes,
        )
        await pipeline.submit(name, email, client_address(request), files)
    except SubmissionError as exc:
        if exc.status_code >= 500:
            logger.exception("Upload failed: %s", exc)
        else:
            logger.warning("Upload rejected: %s", exc)
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return UploadResponse(message="Emails sent!")
