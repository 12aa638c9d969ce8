"""Bucket-style object storage for uploaded product images.

Objects are written under ``<STORAGE_ROOT>/<bucket>/<key>`` and served back
through the ``storage`` blueprint at ``/storage/v1/object/public/<bucket>/<key>``.
Set ``STORAGE_PUBLIC_URL`` to hand out URLs on another host (CDN, bucket
domain) instead.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from flask import Blueprint, Flask, abort, current_app, send_from_directory, url_for
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif", "svg"}

storage_bp = Blueprint("storage", __name__)


class StorageError(Exception):
    """An upload or removal against the object store failed."""


def file_extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].strip().lower()


def object_key_for(filename: str | None, now_ms: int | None = None) -> str:
    """Timestamp-derived key: ``<epoch-ms>.<ext>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = file_extension(filename)
    return f"{now_ms}.{ext}" if ext else str(now_ms)


class ObjectStorage:
    def __init__(self, app: Flask | None = None):
        self.root: Path | None = None
        self.bucket = "product-images"
        self.public_base = ""
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        self.root = Path(app.config["STORAGE_ROOT"])
        self.bucket = app.config.get("STORAGE_BUCKET") or self.bucket
        self.public_base = (app.config.get("STORAGE_PUBLIC_URL") or "").rstrip("/")
        app.extensions["object_storage"] = self
        app.register_blueprint(storage_bp)

    def _bucket_dir(self, bucket: str | None = None) -> Path:
        if self.root is None:
            raise StorageError("storage is not initialised")
        return self.root / (bucket or self.bucket)

    def _safe_key(self, key: str) -> str:
        safe = secure_filename(key)
        if not safe or safe != key:
            raise StorageError(f"invalid object key: {key!r}")
        return safe

    def upload(self, key: str, data: bytes, bucket: str | None = None) -> str:
        """Write a new object. Existing keys are never overwritten."""
        key = self._safe_key(key)
        target_dir = self._bucket_dir(bucket)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with open(target_dir / key, "xb") as fh:
                fh.write(data)
        except FileExistsError as exc:
            raise StorageError(f"object already exists: {key}") from exc
        except OSError as exc:
            raise StorageError(f"could not write object {key}: {exc}") from exc
        logger.info("Stored object %s/%s (%d bytes)", bucket or self.bucket, key, len(data))
        return key

    def remove(self, key: str, bucket: str | None = None) -> None:
        key = self._safe_key(key)
        try:
            os.remove(self._bucket_dir(bucket) / key)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"could not remove object {key}: {exc}") from exc

    def exists(self, key: str, bucket: str | None = None) -> bool:
        return (self._bucket_dir(bucket) / key).is_file()

    def public_url(self, key: str, bucket: str | None = None) -> str:
        bucket = bucket or self.bucket
        if self.public_base:
            return f"{self.public_base}/{bucket}/{key}"
        return url_for("storage.public_object", bucket=bucket, key=key)


@storage_bp.get("/storage/v1/object/public/<bucket>/<key>")
def public_object(bucket: str, key: str):
    store: ObjectStorage = current_app.extensions["object_storage"]
    if secure_filename(bucket) != bucket:
        abort(404)
    directory = store._bucket_dir(bucket)
    return send_from_directory(directory, key, max_age=60 * 60 * 24 * 30)
