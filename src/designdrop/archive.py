"""Упаковка загруженных файлов в zip-архив в памяти."""

from __future__ import annotations

import base64
import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Iterable

from .errors import ArchiveBuildError
from .models import EmailAttachment, UploadedFile

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPE = "application/zip"
COMPRESS_LEVEL = 9


def archive_name(timestamp: str) -> str:
    return f"design-uploads-{timestamp}.zip"


@dataclass(frozen=True)
class Archive:
    filename: str
    content: bytes
    content_type: str = ARCHIVE_CONTENT_TYPE

    def to_attachment(self) -> EmailAttachment:
        return EmailAttachment(
            filename=self.filename,
            content=base64.b64encode(self.content).decode("ascii"),
            content_type=self.content_type,
        )


def build_archive(files: Iterable[UploadedFile], timestamp: str) -> Archive:
    """Собрать все ``files`` в один zip с максимальным сжатием.

    Записи идут в исходном порядке под оригинальными именами. Буфер читается
    только после закрытия ``ZipFile``, когда центральный каталог уже записан.
    Повторяющиеся имена дают повторяющиеся записи.
    """
    buffer = io.BytesIO()
    count = 0
    try:
        with zipfile.ZipFile(
            buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL
        ) as zf:
            for item in files:
                zf.writestr(item.filename, item.content)
                count += 1
    except Exception as exc:
        logger.exception("Archive build failed after %s entries", count)
        raise ArchiveBuildError(f"Failed to build archive: {exc}") from exc

    data = buffer.getvalue()
    logger.debug("Built archive with %s entries (%s bytes)", count, len(data))
    return Archive(filename=archive_name(timestamp), content=data)


__all__ = ["Archive", "build_archive", "archive_name", "ARCHIVE_CONTENT_TYPE"]
