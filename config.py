"""Configuration for the tournament registration service."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(__file__).parent / 'tourney.db'}",
)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_emails(value: str) -> set[str]:
    if not value:
        return set()
    return {x.strip().lower() for x in value.split(",") if x.strip()}


# Object storage (payment screenshots)
STORAGE_DIR = Path(os.getenv("STORAGE_DIR", str(Path(__file__).parent / "storage")))
SCREENSHOT_BUCKET = os.getenv("SCREENSHOT_BUCKET", "payment-screenshots")
SCREENSHOT_BUCKET_PUBLIC = _parse_bool(os.getenv("SCREENSHOT_BUCKET_PUBLIC", "false"))
SIGNED_URL_TTL_SECONDS = int(os.getenv("SIGNED_URL_TTL_SECONDS", "3600"))  # admin detail view: 1 hour
MAX_SCREENSHOT_BYTES = int(os.getenv("MAX_SCREENSHOT_BYTES", str(5 * 1024 * 1024)))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")  # e.g. https://tourney.example.com; empty = relative URLs

# Web auth (JWT secret). Admin passwords live only in the admin_accounts table.
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production-use-long-random-string")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))

# Emails allowed to create an admin account (seeded into admin_users at startup)
ADMIN_ALLOWLIST_EMAILS = _parse_emails(os.getenv("ADMIN_ALLOWLIST_EMAILS", ""))
