"""Resolves the signed-in instructor from the bearer token."""

import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from courtdesk.app.core.security import decode_access_token
from courtdesk.app.db.session import get_db
from courtdesk.app.models.user import User

logger = logging.getLogger(__name__)

_SCHEME = "bearer"


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != _SCHEME or not token.strip():
        raise _unauthenticated()
    return token.strip()


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    token = _bearer_token(authorization)
    try:
        claims = decode_access_token(token)
        user_id = int(claims["sub"])
    except (KeyError, ValueError) as exc:
        logger.info("Rejected access token: %s", exc)
        raise _unauthenticated()

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise _unauthenticated()
    return user
