"""Registration form: staged fields and screenshot, submitted as one unit."""
from __future__ import annotations

import logging
from typing import Optional

import config
from tourney.services import registrations as store
from tourney.services.query_cache import QueryCache, query_cache
from tourney.services.storage import ScreenshotStorage, image_media_type, screenshot_storage
from tourney.services.validation import validate_entry

logger = logging.getLogger("tourney.forms")

EDITING = "editing"
SUBMITTING = "submitting"

# Outcome kinds
SUBMITTED = "submitted"
INVALID_FIELDS = "invalid_fields"
MISSING_SCREENSHOT = "missing_screenshot"
BAD_SCREENSHOT = "bad_screenshot"
UPLOAD_FAILED = "upload_failed"
INSERT_FAILED = "insert_failed"


class StagedScreenshot:
    """An image picked for upload but not yet stored."""

    __slots__ = ("filename", "content_type", "data")

    def __init__(self, filename: str, content_type: str, data: bytes):
        self.filename = filename
        self.content_type = content_type or ""
        self.data = data


class SubmitOutcome:
    """What happened on submit. registration is set only when kind == SUBMITTED."""

    def __init__(
        self,
        kind: str,
        message: str,
        registration: Optional[dict] = None,
        errors: Optional[dict[str, list[str]]] = None,
        error_code: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.registration = registration
        self.errors = errors or {}
        self.error_code = error_code

    @property
    def ok(self) -> bool:
        return self.kind == SUBMITTED


class RegistrationForm:
    """One form instance for a (game, tournament_type) pair.

    State goes editing -> submitting -> editing. A successful submit clears the
    fields and the staged screenshot; any failure keeps them so the visitor can
    retry.
    """

    def __init__(
        self,
        game: str,
        tournament_type: str,
        storage: Optional[ScreenshotStorage] = None,
        cache: Optional[QueryCache] = None,
    ):
        self.game = game
        self.tournament_type = tournament_type
        self.storage = screenshot_storage if storage is None else storage
        self.cache = query_cache if cache is None else cache
        self.state = EDITING
        self.fields: dict = {"youtube_vote": True}
        self.screenshot: Optional[StagedScreenshot] = None

    def set_fields(self, values: dict) -> None:
        self.fields.update(values)

    def stage_screenshot(self, filename: str, content_type: str, data: bytes) -> None:
        self.screenshot = StagedScreenshot(filename, content_type, data)

    def reset(self) -> None:
        self.fields = {"youtube_vote": True}
        self.screenshot = None

    def _check_screenshot(self) -> Optional[str]:
        shot = self.screenshot
        if not shot.content_type.startswith("image/") or image_media_type(shot.filename) is None:
            return "Payment screenshot must be a PNG, JPG, WEBP or GIF image"
        if not shot.data:
            return "Payment screenshot is empty"
        if len(shot.data) > config.MAX_SCREENSHOT_BYTES:
            return f"Payment screenshot must be smaller than {config.MAX_SCREENSHOT_BYTES // (1024 * 1024)} MB"
        return None

    async def submit(self) -> SubmitOutcome:
        if self.state == SUBMITTING:
            return SubmitOutcome(INVALID_FIELDS, "Submission already in progress")
        entry, errors = validate_entry(self.tournament_type, self.fields)
        if entry is None:
            return SubmitOutcome(INVALID_FIELDS, "Please fix the highlighted fields", errors=errors)
        if self.screenshot is None:
            return SubmitOutcome(MISSING_SCREENSHOT, "Please upload payment screenshot")
        problem = self._check_screenshot()
        if problem:
            return SubmitOutcome(BAD_SCREENSHOT, problem)

        self.state = SUBMITTING
        try:
            return await self._upload_and_insert(entry.to_record(self.tournament_type))
        finally:
            self.state = EDITING

    async def _upload_and_insert(self, record: dict) -> SubmitOutcome:
        uploaded = self.storage.upload(self.screenshot.filename, self.screenshot.data)
        if not uploaded.ok:
            return SubmitOutcome(UPLOAD_FAILED, uploaded.error.message, error_code=uploaded.error.code)
        key = uploaded.value

        inserted = await store.insert_registration(self.game, {**record, "payment_screenshot_url": key})
        if not inserted.ok:
            removed = self.storage.delete(key)
            if not removed.ok:
                logger.error("Could not remove orphaned screenshot %s: %s", key, removed.error.message)
            return SubmitOutcome(INSERT_FAILED, inserted.error.message, error_code=inserted.error.code)

        self.reset()
        self.cache.invalidate_registration(self.game, self.tournament_type)
        return SubmitOutcome(
            SUBMITTED,
            "Registration submitted successfully! Awaiting admin approval",
            registration=inserted.value,
        )
