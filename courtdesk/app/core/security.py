"""Password hashing and access tokens for instructor accounts."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from courtdesk.app.core.settings import get_settings

ALGORITHM = "HS256"
TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(subject, expires_minutes: Optional[int] = None) -> str:
    """Sign a token for ``subject`` (a user id, or a claims dict carrying ``sub``)."""
    settings = get_settings()
    if isinstance(subject, dict):
        subject = subject["sub"]
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(subject),
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=lifetime),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM], options={"require": ["exp", "sub"]})
    except jwt.ExpiredSignatureError as exc:
        raise ValueError("Expired token") from exc
    except jwt.InvalidTokenError as exc:
        raise ValueError("Invalid token") from exc
    if claims.get("type") != TOKEN_TYPE:
        raise ValueError("Invalid token")
    return claims
