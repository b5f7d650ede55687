"""Account creation and the password-strength meter used by the sign-up form."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from courtdesk.app.core.security import get_password_hash
from courtdesk.app.db.session import get_db
from courtdesk.app.models.user import User
from courtdesk.app.schemas.login import PasswordStrengthRead, PasswordStrengthRequest
from courtdesk.app.schemas.user import UserCreate, UserRead
from courtdesk.app.services.passwords import password_strength, strength_label

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    email = user_in.email.lower()
    if db.query(User.id).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    user = User(email=email, hashed_password=get_password_hash(user_in.password), full_name=user_in.full_name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered instructor %s", user.id)
    return user


@router.post("/password-strength", response_model=PasswordStrengthRead)
def check_password_strength(payload: PasswordStrengthRequest):
    score = password_strength(payload.password)
    return PasswordStrengthRead(score=score, label=strength_label(score))
