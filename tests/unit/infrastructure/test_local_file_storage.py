"""
Name: Local File Storage Tests

Responsibilities:
  - Generated names keep only the extension
  - Extension / size validation
  - Idempotent delete restricted to the URL prefix
"""

import logging

import pytest

from portal.crosscutting.exceptions import StorageError
from portal.crosscutting.logger import LOGGER_NAME
from portal.domain.services import MediaUpload
from portal.infrastructure.storage import (
    LocalFileStorage,
    UnsupportedMediaError,
    UploadTooLargeError,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "media", url_prefix="/uploads/", max_bytes=16)


def test_save_writes_file_and_returns_public_url(storage):
    url = storage.save(MediaUpload(filename="../../etc/Party.PNG", content=b"png-bytes"))

    assert url.startswith("/uploads/")
    assert url.endswith(".png")
    name = url.rsplit("/", 1)[1]
    assert "Party" not in name
    assert (storage.root / name).read_bytes() == b"png-bytes"


def test_names_are_unique(storage):
    first = storage.save(MediaUpload(filename="a.jpg", content=b"1"))
    second = storage.save(MediaUpload(filename="a.jpg", content=b"2"))

    assert first != second


@pytest.mark.parametrize("filename", ["script.sh", "noext", "doc.pdf"])
def test_rejects_unsupported_extensions(storage, filename):
    with pytest.raises(UnsupportedMediaError):
        storage.save(MediaUpload(filename=filename, content=b"x"))


def test_rejects_oversized_files(storage):
    with pytest.raises(UploadTooLargeError) as exc_info:
        storage.save(MediaUpload(filename="big.mp4", content=b"x" * 17))

    assert exc_info.value.max_bytes == 16
    assert isinstance(exc_info.value, StorageError)


def test_delete_is_idempotent(storage):
    url = storage.save(MediaUpload(filename="clip.webm", content=b"v"))
    name = url.rsplit("/", 1)[1]

    storage.delete(url)
    storage.delete(url)

    assert not (storage.root / name).exists()


def test_delete_ignores_foreign_urls(storage, tmp_path):
    outside = tmp_path / "keep.png"
    outside.write_bytes(b"keep")

    storage.delete("https://cdn.example.com/keep.png")
    storage.delete("")

    assert outside.exists()


def test_filesystem_failure_becomes_storage_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    storage = LocalFileStorage(blocker, url_prefix="/uploads", max_bytes=16)

    with pytest.raises(StorageError):
        storage.save(MediaUpload(filename="a.png", content=b"x"))


def test_save_logs_stored_file_name(storage, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    url = storage.save(MediaUpload(filename="team.jpg", content=b"jpg"))

    record = next(r for r in caplog.records if r.getMessage() == "Archivo guardado")
    assert record.file_name == url.rsplit("/", 1)[1]
    assert record.size_bytes == 3


def test_write_failure_is_logged_and_leaves_no_file(tmp_path, caplog):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    storage = LocalFileStorage(blocker, url_prefix="/uploads", max_bytes=16)
    caplog.set_level(logging.ERROR, logger=LOGGER_NAME)

    with pytest.raises(StorageError):
        storage.save(MediaUpload(filename="a.png", content=b"x"))

    record = next(r for r in caplog.records if "write failed" in r.getMessage())
    assert record.file_name.endswith(".png")
    assert list(tmp_path.iterdir()) == [blocker]
