"""JWT authentication and principal resolution helpers."""

import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from siteadmin.core.config import settings
from siteadmin.core.exceptions import unauthorized
from siteadmin.schemas.schemas import Principal

MAX_BCRYPT_BYTES = 72

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")[:MAX_BCRYPT_BYTES]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")[:MAX_BCRYPT_BYTES]
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(pwd_bytes, hashed_bytes)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise unauthorized("Invalid or expired token")


def principal_from_claims(payload: dict) -> Principal:
    """Build the caller's authorization context from token claims."""
    if payload.get("sub") is None:
        raise unauthorized("Invalid token payload")
    return Principal(
        user_id=int(payload["sub"]),
        username=payload.get("username", ""),
        site_id=payload.get("site_id") or 0,
        is_super_admin=bool(payload.get("super_admin", False)),
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> Principal:
    """Resolve the Principal for the request from its Bearer token."""
    if credentials is None:
        raise unauthorized()
    return principal_from_claims(decode_token(credentials.credentials))
