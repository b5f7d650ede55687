"""Sign-in for instructors."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from courtdesk.app.core.security import create_access_token, verify_password
from courtdesk.app.core.settings import get_settings
from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.user import User
from courtdesk.app.schemas.login import LoginRequest, TokenRead
from courtdesk.app.schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/login", response_model=TokenRead)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == credentials.email.lower()).first()
    if user is None or not user.hashed_password or not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed sign-in for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is inactive")

    expires_minutes = get_settings().access_token_expire_minutes
    return TokenRead(access_token=create_access_token(user.id), expires_in=expires_minutes * 60)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
