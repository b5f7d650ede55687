"""User preferences endpoints (theme and locale)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.user import User
from courtdesk.app.models.user_preferences import UserPreferences
from courtdesk.app.schemas.user_preferences import UserPreferencesRead, UserPreferencesUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _get_or_create_preferences(db: Session, user: User) -> UserPreferences:
    prefs = db.query(UserPreferences).filter(UserPreferences.user_id == user.id).first()
    if prefs:
        return prefs
    prefs = UserPreferences(user_id=user.id)
    db.add(prefs)
    db.commit()
    db.refresh(prefs)
    return prefs


@router.get("/me", response_model=UserPreferencesRead)
async def get_my_preferences(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_or_create_preferences(db, current_user)


@router.put("/me", response_model=UserPreferencesRead)
async def update_my_preferences(
    update: UserPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prefs = _get_or_create_preferences(db, current_user)
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(prefs, field, value)
    db.commit()
    db.refresh(prefs)
    return prefs
