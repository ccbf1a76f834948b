"""Attachment storage for report photos and documents."""

import logging
import os
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from spill_registry.config import settings
from spill_registry.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class ObjectStore(ABC):
    """Base class for object stores."""

    @abstractmethod
    def put(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store bytes under path.

        Returns a URL the object can be retrieved from.
        Raises StoreUnavailable on failure.
        """
        pass


class LocalObjectStore(ObjectStore):
    """Object store on the local filesystem, served under /files."""

    def __init__(self, base_dir: Optional[str] = None, base_url: Optional[str] = None):
        self.base_dir = base_dir or settings.local_storage_dir
        self.base_url = (base_url or settings.public_base_url).rstrip("/")

    def put(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        full_path = os.path.join(self.base_dir, *path.split("/"))
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Error storing {path}: {e}")
            raise StoreUnavailable(f"Could not store {path}: {e}") from e
        return f"{self.base_url}/files/{path}"


def safe_filename(filename: str) -> str:
    """Reduce an uploaded file name to a safe basename."""
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


def _object_path(report_id, kind: str, filename: str) -> str:
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"reports/{report_id}/{kind}/{safe_filename(filename)}-{millis}"


def upload_photo(store: ObjectStore, filename: str, data: bytes, report_id, content_type: Optional[str] = None) -> str:
    """Store a photo for a report and return its URL."""
    url = store.put(_object_path(report_id, "photos", filename), data, content_type)
    logger.info(f"Uploaded photo {filename} for report {report_id}")
    return url


def upload_document(
    store: ObjectStore,
    filename: str,
    data: bytes,
    content_type: Optional[str],
    report_id,
) -> Dict[str, str]:
    """Store a document for a report and return its {name, url, type, date} record."""
    url = store.put(_object_path(report_id, "documents", filename), data, content_type)
    logger.info(f"Uploaded document {filename} for report {report_id}")
    return {
        "name": filename,
        "url": url,
        "type": content_type or "application/octet-stream",
        "date": datetime.now(timezone.utc).isoformat(),
    }
