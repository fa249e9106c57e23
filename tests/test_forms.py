"""Tests for the registration form submit flow."""
import pytest

import config
from conftest import PNG_BYTES, valid_fields

from tourney.services import forms
from tourney.services import registrations as store
from tourney.services.forms import RegistrationForm
from tourney.services.query_cache import QueryCache, count_key
from tourney.services.results import DATABASE, STORAGE, Result
from tourney.services.storage import ScreenshotStorage


class BrokenStorage(ScreenshotStorage):
    def upload(self, filename, data):
        return Result.failure(STORAGE, "Failed to upload payment screenshot: bucket unavailable")


def _stored_files(storage: ScreenshotStorage) -> list:
    if not storage.bucket_dir.exists():
        return []
    return list(storage.bucket_dir.iterdir())


@pytest.fixture
def storage(tmp_path):
    return ScreenshotStorage(tmp_path, "payment-screenshots")


@pytest.mark.asyncio
async def test_submit_success_resets_form_and_invalidates(storage):
    cache = QueryCache()
    cache._entries[count_key("bgmi", "squad")] = (0.0, 0)
    form = RegistrationForm("bgmi", "squad", storage=storage, cache=cache)
    form.set_fields(valid_fields("squad"))
    form.stage_screenshot("payment.png", "image/png", PNG_BYTES)

    outcome = await form.submit()
    assert outcome.ok, outcome.message
    assert outcome.registration["status"] == "pending"
    assert storage.exists(outcome.registration["payment_screenshot_url"])
    assert form.state == forms.EDITING
    assert form.screenshot is None
    assert form.fields == {"youtube_vote": True}
    assert count_key("bgmi", "squad") not in cache


@pytest.mark.asyncio
async def test_missing_screenshot_blocks_submission(storage):
    form = RegistrationForm("bgmi", "solo", storage=storage, cache=QueryCache())
    form.set_fields(valid_fields("solo"))
    outcome = await form.submit()
    assert outcome.kind == forms.MISSING_SCREENSHOT
    assert outcome.message == "Please upload payment screenshot"
    assert (await store.count_registrations("bgmi", "solo", "pending")).value == 0
    assert form.fields["team_leader_name"] == "Rahul Sharma"


@pytest.mark.asyncio
async def test_invalid_fields_block_before_upload(storage):
    form = RegistrationForm("freefire", "duo", storage=storage, cache=QueryCache())
    form.set_fields(valid_fields("duo", whatsapp="12345"))
    form.stage_screenshot("payment.png", "image/png", PNG_BYTES)
    outcome = await form.submit()
    assert outcome.kind == forms.INVALID_FIELDS
    assert "whatsapp" in outcome.errors
    assert _stored_files(storage) == []


@pytest.mark.asyncio
async def test_screenshot_must_be_image_within_limit(storage, monkeypatch):
    form = RegistrationForm("bgmi", "solo", storage=storage, cache=QueryCache())
    form.set_fields(valid_fields("solo"))
    form.stage_screenshot("notes.txt", "text/plain", b"hello")
    assert (await form.submit()).kind == forms.BAD_SCREENSHOT

    monkeypatch.setattr(config, "MAX_SCREENSHOT_BYTES", 10)
    form.stage_screenshot("payment.png", "image/png", PNG_BYTES)
    assert (await form.submit()).kind == forms.BAD_SCREENSHOT
    assert _stored_files(storage) == []


@pytest.mark.asyncio
async def test_upload_failure_keeps_fields(tmp_path):
    form = RegistrationForm("bgmi", "solo", storage=BrokenStorage(tmp_path, "b"), cache=QueryCache())
    form.set_fields(valid_fields("solo"))
    form.stage_screenshot("payment.png", "image/png", PNG_BYTES)
    outcome = await form.submit()
    assert outcome.kind == forms.UPLOAD_FAILED
    assert outcome.error_code == STORAGE
    assert form.state == forms.EDITING
    assert form.screenshot is not None
    assert form.fields["transaction_id"] == "TXN12345678"
    assert (await store.count_registrations("bgmi", "solo", "pending")).value == 0


@pytest.mark.asyncio
async def test_insert_failure_removes_uploaded_screenshot(storage, monkeypatch):
    async def failing_insert(game, record):
        return Result.failure(DATABASE, "Failed to create registration: disk full")

    monkeypatch.setattr(store, "insert_registration", failing_insert)
    form = RegistrationForm("freefire", "squad", storage=storage, cache=QueryCache())
    form.set_fields(valid_fields("squad"))
    form.stage_screenshot("payment.png", "image/png", PNG_BYTES)
    outcome = await form.submit()
    assert outcome.kind == forms.INSERT_FAILED
    assert outcome.error_code == DATABASE
    assert _stored_files(storage) == []
    assert form.fields["team_name"] == "Alpha Wolves"


@pytest.mark.asyncio
async def test_screenshot_extension_must_be_an_image(storage):
    form = RegistrationForm("bgmi", "solo", storage=storage, cache=QueryCache())
    form.set_fields(valid_fields("solo"))
    form.stage_screenshot("proof.svg", "image/png", b"<svg onload='alert(1)'/>")
    outcome = await form.submit()
    assert outcome.kind == forms.BAD_SCREENSHOT
    assert _stored_files(storage) == []
