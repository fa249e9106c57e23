"""Payment screenshot storage: a local bucket with time-limited signed read URLs."""
from __future__ import annotations

import logging
import re
import secrets
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import jwt

import config
from tourney.services.results import INVALID, NOT_FOUND, STORAGE, Result

logger = logging.getLogger("tourney.storage")

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_EXT_RE = re.compile(r"^[a-z0-9]{1,10}$")
SIGNED_URL_AUDIENCE = "storage"

# Extensions accepted for payment screenshots and the media type each is served as
IMAGE_MEDIA_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
}


def generate_key(filename: str) -> str:
    """Collision-resistant object name: millis + random component + original extension."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if not _EXT_RE.match(ext):
        ext = "bin"
    return f"{int(time.time() * 1000)}_{secrets.token_hex(6)}.{ext}"


def image_media_type(name: str) -> Optional[str]:
    """Media type for an allowed image filename or key, else None."""
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    return IMAGE_MEDIA_TYPES.get(ext)


def is_full_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


class ScreenshotStorage:
    """One storage bucket on the local filesystem."""

    def __init__(self, root: Path, bucket: str, public: bool = False):
        self.root = Path(root)
        self.bucket = bucket
        self.public = public

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def _path(self, key: str) -> Optional[Path]:
        if not _KEY_RE.match(key) or key.startswith("."):
            return None
        return self.bucket_dir / key

    def exists(self, key: str) -> bool:
        path = self._path(key)
        return path is not None and path.is_file()

    def upload(self, filename: str, data: bytes) -> Result[str]:
        """Store bytes under a generated key and return the key."""
        key = generate_key(filename)
        try:
            self.bucket_dir.mkdir(parents=True, exist_ok=True)
            (self.bucket_dir / key).write_bytes(data)
        except OSError as e:
            logger.exception("Failed to upload %s to bucket %s", filename, self.bucket)
            return Result.failure(STORAGE, f"Failed to upload payment screenshot: {e}")
        logger.info("Uploaded %s (%d bytes) as %s", filename, len(data), key)
        return Result.success(key)

    def delete(self, key: str) -> Result[bool]:
        path = self._path(key)
        if path is None:
            return Result.failure(INVALID, "Invalid storage key")
        try:
            path.unlink()
        except FileNotFoundError:
            return Result.failure(NOT_FOUND, "Object not found")
        except OSError as e:
            logger.exception("Failed to delete %s from bucket %s", key, self.bucket)
            return Result.failure(STORAGE, f"Failed to delete object: {e}")
        return Result.success(True)

    def read(self, key: str) -> Result[bytes]:
        path = self._path(key)
        if path is None:
            return Result.failure(INVALID, "Invalid storage key")
        try:
            return Result.success(path.read_bytes())
        except FileNotFoundError:
            return Result.failure(NOT_FOUND, "Object not found")
        except OSError as e:
            logger.exception("Failed to read %s from bucket %s", key, self.bucket)
            return Result.failure(STORAGE, f"Failed to read object: {e}")

    def public_url(self, key: str) -> str:
        return f"{config.PUBLIC_BASE_URL.rstrip('/')}/api/storage/public/{self.bucket}/{quote(key)}"

    def signed_url(self, key: str, ttl_seconds: int) -> Result[str]:
        """Temporary URL granting read access to key for ttl_seconds."""
        if ttl_seconds <= 0:
            return Result.failure(INVALID, "TTL must be positive")
        if not self.exists(key):
            return Result.failure(NOT_FOUND, "Object not found")
        expire = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        payload = {"sub": key, "bucket": self.bucket, "aud": SIGNED_URL_AUDIENCE, "exp": expire}
        token = jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)
        base = config.PUBLIC_BASE_URL.rstrip("/")
        return Result.success(f"{base}/api/storage/{self.bucket}/{quote(key)}?token={token}")

    def verify_token(self, key: str, token: str) -> bool:
        """True when token was issued for this bucket and key and has not expired."""
        try:
            payload = jwt.decode(
                token,
                config.JWT_SECRET,
                algorithms=[config.JWT_ALGORITHM],
                audience=SIGNED_URL_AUDIENCE,
            )
        except jwt.InvalidTokenError:
            return False
        return payload.get("sub") == key and payload.get("bucket") == self.bucket

    def resolve_display_url(self, stored: str, ttl_seconds: int) -> Result[str]:
        """Stored values may be a bare key (signed here) or an already full URL (returned as is)."""
        if is_full_url(stored):
            return Result.success(stored)
        return self.signed_url(stored, ttl_seconds)


screenshot_storage = ScreenshotStorage(
    config.STORAGE_DIR,
    config.SCREENSHOT_BUCKET,
    public=config.SCREENSHOT_BUCKET_PUBLIC,
)
