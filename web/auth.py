"""Authentication for the admin API: JWT, password hashing, session checks."""
from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy import select

import config
from tourney.models import AdminAccount, AdminAllowlistEntry
from tourney.models.base import async_session_factory

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
http_bearer = HTTPBearer(auto_error=False)


def _prepare_password(password: str) -> str:
    """Bcrypt has a 72-byte limit. Pre-hash longer passwords with SHA256."""
    encoded = password.encode("utf-8")
    if len(encoded) > 72:
        return hashlib.sha256(encoded).hexdigest()
    return password


def hash_password(password: str) -> str:
    return pwd_context.hash(_prepare_password(password))


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(_prepare_password(plain), hashed)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def create_access_token(email: str, token_version: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=config.JWT_EXPIRE_DAYS)
    payload = {"sub": email, "ver": token_version, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


async def get_admin_by_email(email: str) -> Optional[AdminAccount]:
    async with async_session_factory() as session:
        result = await session.execute(select(AdminAccount).where(AdminAccount.email == normalize_email(email)))
        return result.scalar_one_or_none()


async def is_allowlisted(email: str) -> bool:
    async with async_session_factory() as session:
        result = await session.execute(
            select(AdminAllowlistEntry).where(AdminAllowlistEntry.email == normalize_email(email))
        )
        return result.scalar_one_or_none() is not None


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    x_auth_token: Optional[str] = Header(None, alias="X-Auth-Token"),
) -> Optional[AdminAccount]:
    """Return the signed-in admin, or None. Accepts Authorization: Bearer or X-Auth-Token (fallback for proxies that strip Authorization)."""
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    elif x_auth_token:
        token = x_auth_token
    if not token:
        return None
    payload = decode_token(token)
    if not payload:
        return None
    email = payload.get("sub")
    if not email:
        return None
    admin = await get_admin_by_email(email)
    if not admin or payload.get("ver") != admin.token_version:
        return None
    return admin


async def require_admin(
    admin: Optional[AdminAccount] = Depends(get_current_admin),
) -> AdminAccount:
    """Require a signed-in admin. Raises 401 otherwise; the client sends the visitor to /admin."""
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return admin
