"""Object storage read routes: signed (time-limited) and public."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from tourney.services.storage import image_media_type, screenshot_storage
from web.api.utils import unwrap_or_raise

router = APIRouter(prefix="/api/storage", tags=["storage"])


def _object_response(key: str) -> Response:
    data = unwrap_or_raise(screenshot_storage.read(key))
    # Anything outside the image allow-list is served as an opaque download
    media_type = image_media_type(key) or "application/octet-stream"
    headers = {"Cache-Control": "private, no-store", "X-Content-Type-Options": "nosniff"}
    return Response(content=data, media_type=media_type, headers=headers)


@router.get("/public/{bucket}/{key}")
async def get_public_object(bucket: str, key: str):
    """Read without a token. Only when the bucket is configured public."""
    if bucket != screenshot_storage.bucket or not screenshot_storage.public:
        raise HTTPException(404, "Bucket not found")
    return _object_response(key)


@router.get("/{bucket}/{key}")
async def get_signed_object(bucket: str, key: str, token: str = ""):
    """Read through a signed URL. 403 once the token expires or for another object."""
    if bucket != screenshot_storage.bucket:
        raise HTTPException(404, "Bucket not found")
    if not token or not screenshot_storage.verify_token(key, token):
        raise HTTPException(403, "Invalid or expired signature")
    return _object_response(key)
