"""Append-only JSON Lines log of submissions."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from .errors import LogStoreError
from .models import SubmissionRecord

logger = logging.getLogger(__name__)


class SubmissionLog:
    """Журнал заявок: одна JSON-строка на заявку.

    Запись выполняется одним ``os.write`` в дескриптор, открытый с
    ``O_APPEND``, поэтому строки параллельных запросов не перемешиваются.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def append(self, record: SubmissionRecord) -> None:
        line = record.to_json_line().encode("utf-8")
        try:
            if self.path.parent != Path("."):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
            try:
                written = os.write(fd, line)
            finally:
                os.close(fd)
        except OSError as exc:
            logger.error("Failed to append to %s: %s", self.path, exc)
            raise LogStoreError(f"Error writing log: {exc}") from exc
        if written != len(line):
            raise LogStoreError(
                f"Short write to {self.path}: {written} of {len(line)} bytes"
            )
        logger.debug("Appended submission from %s to %s", record.email, self.path)

    def read_all(self) -> List[Dict[str, Any]]:
        """Вернуть все записи журнала; пустой или отсутствующий журнал даёт ``[]``."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read %s: %s", self.path, exc)
            raise LogStoreError("Error reading log") from exc

        records: List[Dict[str, Any]] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                logger.error("Malformed record in %s at line %s", self.path, lineno)
                raise LogStoreError("Error reading log") from exc
        return records


__all__ = ["SubmissionLog"]
