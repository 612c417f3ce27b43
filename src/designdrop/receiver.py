"""Приём multipart-загрузки в память с ограничением размера."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from fastapi import Request, UploadFile

from .errors import NoFilesProvided, PayloadTooLarge, TooManyFiles
from .models import UploadedFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def client_address(request: Request) -> str:
    """Адрес клиента: первый элемент ``X-Forwarded-For`` или адрес соединения."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def receive_files(
    files: Optional[Sequence[UploadFile]],
    *,
    max_files: int,
    max_file_bytes: int,
    max_total_bytes: int,
) -> List[UploadedFile]:
    """Read every upload part into memory, enforcing count and size caps.

    Parts without a filename come from an empty file input and are dropped
    before counting. Parts are read in ``CHUNK_SIZE`` pieces and copied into
    memory only up to the per-file and per-request caps; the request body as a
    whole is bounded earlier by the ``Content-Length`` check in the server.
    """
    parts = [part for part in files or [] if part.filename]
    if not parts:
        raise NoFilesProvided()
    if len(parts) > max_files:
        raise TooManyFiles(f"Too many files uploaded: {len(parts)} > {max_files}")

    received: List[UploadedFile] = []
    total = 0
    for part in parts:
        filename = part.filename
        chunks: list[bytes] = []
        size = 0
        while True:
            chunk = await part.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            total += len(chunk)
            if size > max_file_bytes:
                raise PayloadTooLarge(
                    f"File {filename!r} exceeds {max_file_bytes} bytes"
                )
            if total > max_total_bytes:
                raise PayloadTooLarge(f"Upload exceeds {max_total_bytes} bytes")
            chunks.append(chunk)
        received.append(
            UploadedFile(
                filename=filename,
                content_type=part.content_type or "application/octet-stream",
                content=b"".join(chunks),
            )
        )
        logger.debug("Received %s (%s bytes)", filename, size)
    return received


__all__ = ["receive_files", "client_address", "CHUNK_SIZE"]
