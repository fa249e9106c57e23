"""Auth API routes: admin sign-in, sign-up, sign-out and session lookup."""
from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from tourney.models import AdminAccount
from tourney.models.base import async_session_factory
from web.auth import (
    create_access_token,
    get_admin_by_email,
    get_current_admin,
    hash_password,
    is_allowlisted,
    normalize_email,
    require_admin,
    verify_password,
)

logger = logging.getLogger("tourney.web")

router = APIRouter(prefix="/api/auth", tags=["auth"])

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
ACCOUNT_EXISTS = "An admin account already exists for this email"


def _check_email(v: str) -> str:
    v = normalize_email(v)
    if not EMAIL_RE.match(v):
        raise ValueError("Please enter a valid email address")
    return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class SignupRequest(BaseModel):
    email: str
    password: str
    confirm_password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    email: str


class AdminResponse(BaseModel):
    email: str


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest):
    """Authenticate against the admin credential store and return a JWT."""
    admin = await get_admin_by_email(body.email)
    if not admin or not verify_password(body.password, admin.password_hash):
        logger.info("Failed admin login for %s", body.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(admin.email, admin.token_version)
    return LoginResponse(access_token=token, email=admin.email)


@router.post("/signup", response_model=AdminResponse, status_code=201)
async def signup(body: SignupRequest):
    """Create an admin account. The email must already be on the admin_users allow-list."""
    if not await is_allowlisted(body.email):
        raise HTTPException(status_code=403, detail="This email is not authorized as an admin")
    if await get_admin_by_email(body.email):
        raise HTTPException(status_code=400, detail=ACCOUNT_EXISTS)
    async with async_session_factory() as session:
        admin = AdminAccount(email=body.email, password_hash=hash_password(body.password))
        session.add(admin)
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent signup for the same email won the unique constraint
            await session.rollback()
            raise HTTPException(status_code=400, detail=ACCOUNT_EXISTS)
    logger.info("Created admin account %s", body.email)
    return AdminResponse(email=body.email)


@router.post("/logout")
async def logout(admin: AdminAccount = Depends(require_admin)):
    """Sign out: every token issued to this admin stops working."""
    async with async_session_factory() as session:
        await session.execute(
            update(AdminAccount)
            .where(AdminAccount.id == admin.id)
            .values(token_version=AdminAccount.token_version + 1)
        )
        await session.commit()
    return {"ok": True}


@router.get("/me", response_model=AdminResponse)
async def get_me(admin: AdminAccount = Depends(require_admin)):
    """Get current signed-in admin."""
    return AdminResponse(email=admin.email)


@router.get("/session")
async def get_session(admin: Optional[AdminAccount] = Depends(get_current_admin)):
    """Current session if signed in, else null. For the dashboard's redirect check."""
    if not admin:
        return None
    return {"email": admin.email}
