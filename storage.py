"""
Upload handling for provider images.

Validation is done on the bytes and metadata of each upload; where the bytes
end up is the job of an `UploadStorage` backend. `LocalDiskStorage` writes
under the uploads root, which is served at /Uploads.
"""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import List, Optional, Protocol

from fastapi import HTTPException, UploadFile

from config import get_uploads_dir

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png"}
WEB_PREFIX = "/Uploads/"
MAX_PHOTOS = 5


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


class UploadStorage(Protocol):
    def save(self, data: bytes, filename: str, content_type: str) -> str: ...

    def delete(self, web_path: str) -> None: ...


def normalize_web_path(path: str) -> str:
    """Turn a stored file path into the web path it is served from."""
    name = path.replace("\\", "/").split("Uploads/")[-1]
    return WEB_PREFIX + name.lstrip("/")


class LocalDiskStorage:
    def __init__(self, root: Optional[str] = None):
        self.root = root or get_uploads_dir()

    def ensure_root(self) -> None:
        if not os.path.isdir(self.root):
            os.makedirs(self.root, exist_ok=True)
            logger.info(f"Created Uploads directory: {self.root}")

    def save(self, data: bytes, filename: str, content_type: str) -> str:
        self.ensure_root()
        safe_name = os.path.basename(filename.replace("\\", "/")).replace(" ", "_")
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_name}"
        full_path = os.path.join(self.root, stored_name)
        with open(full_path, "wb") as fh:
            fh.write(data)
        return normalize_web_path(os.path.relpath(full_path, self.root))

    def delete(self, web_path: str) -> None:
        if not web_path or not web_path.startswith(WEB_PREFIX):
            return
        full_path = os.path.join(self.root, web_path[len(WEB_PREFIX):])
        try:
            os.remove(full_path)
        except FileNotFoundError:
            logger.warning(f"Upload already missing: {full_path}")


def read_image(upload: UploadFile) -> ImageUpload:
    """Read an upload and reject anything that is not a small JPEG/PNG."""
    filename = upload.filename or ""
    content_type = (upload.content_type or "").lower()
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(status_code=400, detail="Only JPEG/PNG images are allowed")
    data = upload.file.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="File too large: maximum size is 5MB")
    return ImageUpload(filename=filename, content_type=content_type, data=data)


def read_images(uploads: Optional[List[UploadFile]]) -> List[ImageUpload]:
    return [read_image(u) for u in (uploads or []) if u is not None and u.filename]


def save_all(storage: UploadStorage, images: List[ImageUpload], written: List[str]) -> List[str]:
    """Save images, appending each web path to `written` as soon as it exists."""
    paths = []
    for image in images:
        path = storage.save(image.data, image.filename, image.content_type)
        written.append(path)
        paths.append(path)
    return paths


def discard(storage: UploadStorage, paths: List[str]) -> None:
    for path in paths:
        try:
            storage.delete(path)
        except OSError as e:
            logger.error(f"Failed to remove upload {path}: {e}", exc_info=True)
