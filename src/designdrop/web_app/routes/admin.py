from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...errors import LogStoreError
from ...submission_log import SubmissionLog
from ..deps import get_submission_log

router = APIRouter()

logger = logging.getLogger(__name__)


# TODO: require an operator token before exposing this outside a private network;
# records contain submitter names, emails and addresses.
@router.get("/admin")
async def list_submissions(
    submission_log: SubmissionLog = Depends(get_submission_log),
) -> List[Dict[str, Any]]:
    """Вернуть все записи журнала заявок."""
    try:
        return await asyncio.to_thread(submission_log.read_all)
    except LogStoreError as exc:
        logger.exception("Failed to read submission log %s", submission_log.path)
        raise HTTPException(status_code=500, detail="Error reading log") from exc
