"""Конвейер обработки заявки: архив -> журнал -> уведомления."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Callable, List, Optional

from .archive import build_archive
from .config import Settings
from .errors import NoFilesProvided, SubmissionError
from .models import Preview, SubmissionRecord, UploadedFile, make_timestamp
from .services.email_client import EmailClient
from .services.notifier import Notifier
from .submission_log import SubmissionLog

logger = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    RECEIVED = "received"
    ARCHIVED = "archived"
    LOGGED = "logged"
    NOTIFIED = "notified"
    RESPONDED = "responded"
    FAILED = "failed"


class SubmissionPipeline:
    """Process one submission per call; holds no per-request state.

    Steps run strictly in order and the first failure stops the run. Nothing
    is rolled back: a record already written to the log stays there when
    notification fails afterwards.
    """

    def __init__(
        self,
        settings: Settings,
        submission_log: SubmissionLog,
        notifier: Notifier,
        *,
        clock: Callable[[], str] = make_timestamp,
    ) -> None:
        self.settings = settings
        self.submission_log = submission_log
        self.notifier = notifier
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "SubmissionPipeline":
        client = EmailClient(
            settings.resend_api_key,
            base_url=settings.email_api_url,
            timeout=settings.email_timeout,
        )
        notifier = Notifier(
            client,
            sender=settings.sender_email,
            operator_email=settings.operator_email,
            brand_name=settings.brand_name,
        )
        return cls(settings, SubmissionLog(settings.log_store_path), notifier)

    async def submit(
        self,
        name: str,
        email: str,
        ip: str,
        files: List[UploadedFile],
    ) -> SubmissionRecord:
        if not files:
            raise NoFilesProvided()

        record = SubmissionRecord(
            name=name,
            email=email,
            ip=ip,
            timestamp=self.clock(),
            fileCount=len(files),
        )
        stage = Stage.RECEIVED
        logger.info("Upload from %s <%s> with %s files", name, email, len(files))
        try:
            archive = await asyncio.to_thread(build_archive, files, record.timestamp)
            stage = self._advance(stage, Stage.ARCHIVED)

            preview: Optional[Preview] = Preview.from_files(files)
            await asyncio.to_thread(self.submission_log.append, record)
            stage = self._advance(stage, Stage.LOGGED)

            await self.notifier.notify(record, archive, preview)
            stage = self._advance(stage, Stage.NOTIFIED)
        except SubmissionError as exc:
            logger.error(
                "Submission %s failed at stage %s: %s", record.timestamp, stage.value, exc
            )
            self._advance(stage, Stage.FAILED)
            raise

        logger.info("Emails sent for submission %s", record.timestamp)
        self._advance(stage, Stage.RESPONDED)
        return record

    @staticmethod
    def _advance(current: Stage, new: Stage) -> Stage:
        logger.debug("Submission stage %s -> %s", current.value, new.value)
        return new


__all__ = ["SubmissionPipeline", "Stage"]
