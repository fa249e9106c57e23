"""Navigation and static page routes: landing, contact, disclaimer."""
from __future__ import annotations

import logging
import re

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from tourney.games import GAMES
from web.api import content

logger = logging.getLogger("tourney.web")

router = APIRouter(prefix="/api", tags=["pages"])

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ContactMessage(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=255)
    phone: str = Field(min_length=10, max_length=15)
    subject: str = Field(min_length=5, max_length=200)
    message: str = Field(min_length=10, max_length=1000)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v


@router.get("/navigation")
async def navigation():
    return {"brand": content.SITE_NAME, "links": content.NAV_LINKS, "admin_path": "/admin"}


@router.get("/pages/landing")
async def landing_page():
    return {
        "brand": content.SITE_NAME,
        "features": content.LANDING_FEATURES,
        "games": [
            {"name": g["name"], "path": g["path"], "description": g["description"]}
            for g in GAMES.values()
        ],
    }


@router.get("/pages/contact")
async def contact_page():
    return {"contact_info": content.CONTACT_INFO, "faq": content.FAQ}


@router.get("/pages/disclaimer")
async def disclaimer_page():
    return {"sections": content.DISCLAIMER_SECTIONS, "points": content.DISCLAIMER_POINTS}


@router.post("/contact")
async def send_contact_message(body: ContactMessage):
    """Accept a contact message. Not persisted; logged for the support inbox."""
    logger.info("Contact message from %s <%s>: %s", body.name, body.email, body.subject)
    return {"ok": True, "message": "Message sent successfully! We'll get back to you soon."}
