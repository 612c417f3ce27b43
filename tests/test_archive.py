import base64
import io
import zipfile

import pytest

from designdrop import archive as archive_module
from designdrop.archive import build_archive
from designdrop.errors import ArchiveBuildError
from designdrop.models import UploadedFile

TIMESTAMP = "2024-05-01T10-11-12-345Z"


def _files(count):
    return [
        UploadedFile(
            filename=f"part-{i}.bin",
            content_type="application/octet-stream",
            content=bytes(range(i, i + 50)) * (i + 1),
        )
        for i in range(count)
    ]


@pytest.mark.parametrize("count", [1, 3, 10])
def test_archive_contains_every_file(count):
    files = _files(count)
    result = build_archive(files, TIMESTAMP)

    with zipfile.ZipFile(io.BytesIO(result.content)) as zf:
        names = zf.namelist()
        assert names == [f.filename for f in files]
        for item in files:
            assert zf.read(item.filename) == item.content
            assert zf.getinfo(item.filename).compress_type == zipfile.ZIP_DEFLATED


def test_archive_name_and_attachment():
    files = _files(2)
    result = build_archive(files, TIMESTAMP)

    assert result.filename == "design-uploads-2024-05-01T10-11-12-345Z.zip"
    attachment = result.to_attachment()
    assert attachment.content_type == "application/zip"
    assert base64.b64decode(attachment.content) == result.content


def test_duplicate_names_are_kept():
    files = [
        UploadedFile(filename="same.txt", content=b"first"),
        UploadedFile(filename="same.txt", content=b"second"),
    ]
    with pytest.warns(UserWarning):
        result = build_archive(files, TIMESTAMP)
    with zipfile.ZipFile(io.BytesIO(result.content)) as zf:
        infos = zf.infolist()
        assert [i.filename for i in infos] == ["same.txt", "same.txt"]
        assert [zf.read(i) for i in infos] == [b"first", b"second"]


def test_write_failure_raises_archive_error(monkeypatch):
    class BrokenZip(zipfile.ZipFile):
        def writestr(self, *args, **kwargs):
            raise OSError("disk gone")

    monkeypatch.setattr(archive_module.zipfile, "ZipFile", BrokenZip)
    with pytest.raises(ArchiveBuildError) as exc:
        build_archive(_files(1), TIMESTAMP)
    assert "disk gone" in str(exc.value)
    assert exc.value.status_code == 500
