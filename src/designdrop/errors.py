"""Исключения конвейера приёма загрузок."""

from __future__ import annotations


class SubmissionError(RuntimeError):
    """Базовая ошибка обработки заявки, несёт HTTP-статус."""

    status_code = 500
    default_message = "Submission failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoFilesProvided(SubmissionError):
    status_code = 400
    default_message = "No files uploaded"


class TooManyFiles(SubmissionError):
    status_code = 400
    default_message = "Too many files uploaded"


class PayloadTooLarge(SubmissionError):
    status_code = 413
    default_message = "Upload is too large"


class ArchiveBuildError(SubmissionError):
    default_message = "Failed to build archive"


class LogStoreError(SubmissionError):
    default_message = "Error writing log"


class NotificationDispatchError(SubmissionError):
    default_message = "Email sending failed."


__all__ = [
    "SubmissionError",
    "NoFilesProvided",
    "TooManyFiles",
    "PayloadTooLarge",
    "ArchiveBuildError",
    "LogStoreError",
    "NotificationDispatchError",
]
