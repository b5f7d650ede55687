"""User profile endpoints, including the avatar upload."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from courtdesk.app.core.settings import get_settings
from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.user import User
from courtdesk.app.schemas.user import UserProfileRead, UserProfileUpdate
from courtdesk.app.services.storage import LocalObjectStorage, UploadRejected, avatar_key, get_storage, validate_avatar

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=UserProfileRead)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserProfileRead)
async def update_my_profile(
    profile: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    update_fields = {
        "full_name": profile.full_name,
        "phone": profile.phone,
        "avatar_url": profile.avatar_url,
    }
    for field, value in update_fields.items():
        if value is not None:
            setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/me/avatar", response_model=UserProfileRead)
async def upload_my_avatar(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: LocalObjectStorage = Depends(get_storage),
):
    settings = get_settings()
    data = await file.read()
    try:
        validate_avatar(file.content_type, len(data), settings.max_avatar_bytes)
        stored = storage.put(avatar_key(current_user.id, file.filename, file.content_type), data, file.content_type)
    except UploadRejected as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    previous_key = storage.key_from_url(current_user.avatar_url)
    current_user.avatar_url = stored.url
    db.commit()
    db.refresh(current_user)
    if previous_key and previous_key != stored.key:
        storage.delete(previous_key)
    return current_user


@router.delete("/me/avatar", response_model=UserProfileRead)
async def remove_my_avatar(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: LocalObjectStorage = Depends(get_storage),
):
    previous_key = storage.key_from_url(current_user.avatar_url)
    current_user.avatar_url = None
    db.commit()
    db.refresh(current_user)
    # Externally hosted avatar URLs have no stored object
    if previous_key:
        storage.delete(previous_key)
    return current_user
