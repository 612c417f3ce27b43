import asyncio
import logging

import pytest

from designdrop.config import Settings
from designdrop.errors import LogStoreError, NoFilesProvided, NotificationDispatchError
from designdrop.models import UploadedFile
from designdrop.pipeline import SubmissionPipeline
from designdrop.services.email_client import EmailClient, EmailDeliveryError
from designdrop.submission_log import SubmissionLog


class RecordingNotifier:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def notify(self, record, archive, preview=None):
        self.calls.append((record, archive, preview))
        if self.error:
            raise self.error


FILES = [
    UploadedFile(filename="a.txt", content_type="text/plain", content=b"a"),
    UploadedFile(filename="b.gif", content_type="image/gif", content=b"GIF89a"),
]


def _pipeline(tmp_path, notifier, log_path=None):
    return SubmissionPipeline(
        Settings(),
        SubmissionLog(log_path or tmp_path / "log.jsonl"),
        notifier,
        clock=lambda: "2024-01-01T00-00-00-000Z",
    )


def test_submit_runs_all_stages(tmp_path, caplog):
    notifier = RecordingNotifier()
    pipeline = _pipeline(tmp_path, notifier)
    with caplog.at_level(logging.DEBUG, logger="designdrop.pipeline"):
        record = asyncio.run(pipeline.submit("Ann", "ann@example.com", "1.2.3.4", FILES))

    assert record.file_count == 2
    assert SubmissionLog(tmp_path / "log.jsonl").read_all()[0]["fileCount"] == 2
    _, archive, preview = notifier.calls[0]
    assert archive.filename == "design-uploads-2024-01-01T00-00-00-000Z.zip"
    assert preview.content_type == "image/gif"
    for stage in ("received -> archived", "archived -> logged", "logged -> notified", "notified -> responded"):
        assert stage in caplog.text


def test_submit_without_files(tmp_path):
    notifier = RecordingNotifier()
    with pytest.raises(NoFilesProvided):
        asyncio.run(_pipeline(tmp_path, notifier).submit("Ann", "a@x", "ip", []))
    assert notifier.calls == []
    assert not (tmp_path / "log.jsonl").exists()


def test_notification_failure_keeps_log_record(tmp_path, caplog):
    notifier = RecordingNotifier(error=NotificationDispatchError())
    with caplog.at_level(logging.DEBUG, logger="designdrop.pipeline"), pytest.raises(
        NotificationDispatchError
    ):
        asyncio.run(_pipeline(tmp_path, notifier).submit("Ann", "a@x", "ip", FILES))
    assert len(SubmissionLog(tmp_path / "log.jsonl").read_all()) == 1
    assert "failed at stage logged" in caplog.text
    assert "logged -> failed" in caplog.text


def test_log_failure_skips_notification(tmp_path):
    notifier = RecordingNotifier()
    with pytest.raises(LogStoreError):
        asyncio.run(_pipeline(tmp_path, notifier, log_path=tmp_path).submit("Ann", "a@x", "ip", FILES))
    assert notifier.calls == []


def test_from_settings_wires_email_client(tmp_path):
    settings = Settings(
        resend_api_key="re_key",
        email_api_url="https://mail.test",
        email_timeout=7,
        operator_email="ops@example.com",
        log_store_path=str(tmp_path / "x.jsonl"),
    )
    pipeline = SubmissionPipeline.from_settings(settings)
    client = pipeline.notifier.client
    assert isinstance(client, EmailClient)
    assert client.api_key == "re_key"
    assert client.base_url == "https://mail.test"
    assert client.timeout == 7
    assert pipeline.notifier.operator_email == "ops@example.com"
    assert pipeline.submission_log.path == tmp_path / "x.jsonl"


def test_missing_api_key_fails_notification(tmp_path):
    settings = Settings(resend_api_key=None, log_store_path=str(tmp_path / "x.jsonl"))
    pipeline = SubmissionPipeline.from_settings(settings)
    with pytest.raises(NotificationDispatchError) as exc:
        asyncio.run(pipeline.submit("Ann", "a@x", "ip", FILES))
    assert isinstance(exc.value.__cause__, EmailDeliveryError)
