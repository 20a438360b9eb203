"""Tests for image upload and deletion."""

import re

import pytest

from bookswap.config import StorageConfig
from bookswap.error_handling import InvalidInputError, NotFoundError, RemoteError
from bookswap.services import ImageService
from remote_fakes import FakeRemoteClient, run_async


def test_upload_bytes_returns_public_url():
    client = FakeRemoteClient()
    images = ImageService(client)

    url = run_async(images.upload_image(b"\xff\xd8jpeg", "covers/book-001"))

    [(bucket, name)] = list(client.blobs)
    assert bucket == "book-images"
    assert re.fullmatch(r"covers/book-001_\d+\.jpg", name)
    assert url == f"https://storage.test/book-images/{name}"
    assert client.blobs[(bucket, name)] == (b"\xff\xd8jpeg", "image/jpeg")


def test_upload_from_file(tmp_path):
    client = FakeRemoteClient()
    images = ImageService(client, StorageConfig(image_bucket="avatars"))
    photo = tmp_path / "me.jpg"
    photo.write_bytes(b"portrait")

    url = run_async(images.upload_image(str(photo), "profiles/user-001"))

    assert url.startswith("https://storage.test/avatars/profiles/user-001_")
    assert [data for data, _ in client.blobs.values()] == [b"portrait"]


def test_upload_to_explicit_bucket():
    client = FakeRemoteClient()

    run_async(ImageService(client).upload_image(b"x", "misc/img", bucket="other"))

    assert [bucket for bucket, _ in client.blobs] == ["other"]


def test_upload_missing_file(tmp_path):
    with pytest.raises(NotFoundError):
        run_async(ImageService(FakeRemoteClient()).upload_image(tmp_path / "nope.jpg", "covers/x"))


def test_upload_empty_image():
    client = FakeRemoteClient()

    with pytest.raises(InvalidInputError):
        run_async(ImageService(client).upload_image(b"", "covers/x"))
    assert client.blobs == {}


def test_delete_image():
    client = FakeRemoteClient()
    client.blobs[("book-images", "covers/a.jpg")] = (b"a", "image/jpeg")

    run_async(ImageService(client).delete_image("covers/a.jpg"))

    assert client.blobs == {}


def test_storage_failures_propagate(caplog):
    client = FakeRemoteClient()
    failure = RemoteError("bucket not found", status=404)
    client.blob_failure = failure
    images = ImageService(client)

    with pytest.raises(RemoteError) as exc_info:
        run_async(images.upload_image(b"x", "covers/x"))
    assert exc_info.value is failure

    with pytest.raises(RemoteError):
        run_async(images.delete_image("covers/x.jpg"))

    assert "Operation failed: upload_image" in caplog.text
    assert "Operation failed: delete_image" in caplog.text
