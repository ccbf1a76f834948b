"""Tests for attachment storage."""

import os

import pytest

from spill_registry.core.attachments import LocalObjectStore, safe_filename, upload_document, upload_photo
from spill_registry.core.errors import StoreUnavailable


def test_safe_filename():
    """Test upload names are reduced to safe basenames."""
    assert safe_filename("photo 1.jpg") == "photo_1.jpg"
    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("C:\\Users\\me\\rapport.pdf") == "rapport.pdf"
    assert safe_filename("") == "file"


def test_upload_photo(tmp_path):
    """Test photos land under the report's photo namespace."""
    store = LocalObjectStore(str(tmp_path), "http://files.example/")

    url = upload_photo(store, "deversement.jpg", b"jpeg-bytes", 7)

    assert url.startswith("http://files.example/files/reports/7/photos/deversement.jpg-")
    relative = url.split("/files/", 1)[1]
    with open(os.path.join(tmp_path, *relative.split("/")), "rb") as f:
        assert f.read() == b"jpeg-bytes"


def test_upload_document(tmp_path):
    """Test document records carry name, url, type and date."""
    store = LocalObjectStore(str(tmp_path), "http://files.example")

    document = upload_document(store, "rapport labo.pdf", b"%PDF", "application/pdf", 7)

    assert document["name"] == "rapport labo.pdf"
    assert "/files/reports/7/documents/rapport_labo.pdf-" in document["url"]
    assert document["type"] == "application/pdf"
    assert document["date"]


def test_store_failure_raises(tmp_path):
    """Test filesystem errors surface as StoreUnavailable."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = LocalObjectStore(str(blocker), "http://files.example")

    with pytest.raises(StoreUnavailable):
        upload_photo(store, "a.jpg", b"x", 1)
