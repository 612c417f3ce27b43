from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def make_timestamp(now: datetime | None = None) -> str:
    """Вернуть ISO-8601 метку времени, пригодную для имени файла.

    ``2024-05-01T10:11:12.345Z`` превращается в ``2024-05-01T10-11-12-345Z``.
    """
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class UploadedFile(BaseModel):
    filename: str
    content_type: str = "application/octet-stream"
    content: bytes = b""

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")


class SubmissionRecord(BaseModel):
    """One line of the submission log."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    email: str = ""
    ip: str = "unknown"
    timestamp: str
    file_count: int = Field(alias="fileCount", ge=1)

    def to_json_line(self) -> str:
        return self.model_dump_json(by_alias=True) + "\n"


class Preview(BaseModel):
    content_type: str
    data: str

    @classmethod
    def from_files(cls, files: List[UploadedFile]) -> Optional["Preview"]:
        """Построить превью из первого изображения среди ``files``."""
        for item in files:
            if item.is_image:
                return cls(
                    content_type=item.content_type,
                    data=base64.b64encode(item.content).decode("ascii"),
                )
        return None

    @property
    def data_url(self) -> str:
        return f"data:{self.content_type};base64,{self.data}"


class EmailAttachment(BaseModel):
    filename: str
    content: str
    content_type: str = "application/octet-stream"


class EmailMessage(BaseModel):
    sender: str
    to: str
    subject: str
    html: str
    attachments: List[EmailAttachment] = Field(default_factory=list)


class UploadResponse(BaseModel):
    message: str


__all__ = [
    "make_timestamp",
    "UploadedFile",
    "SubmissionRecord",
    "Preview",
    "EmailAttachment",
    "EmailMessage",
    "UploadResponse",
]
