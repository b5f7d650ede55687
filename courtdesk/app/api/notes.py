"""Free-form notes endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.note import Note
from courtdesk.app.models.user import User
from courtdesk.app.schemas.note import NoteCategory, NoteCreate, NoteRead, NoteUpdate

router = APIRouter(prefix="/notes", tags=["notes"])


def _get_owned_note(db: Session, note_id: int, user_id: int) -> Note:
    note = db.query(Note).filter(Note.id == note_id, Note.owner_id == user_id).first()
    if not note:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.post("/", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(note_in: NoteCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    note = Note(owner_id=current_user.id, **note_in.model_dump())
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


@router.get("/", response_model=list[NoteRead])
async def list_notes(
    category: Optional[NoteCategory] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Note).filter(Note.owner_id == current_user.id)
    if category:
        query = query.filter(Note.category == category)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Note.title.ilike(pattern), Note.content.ilike(pattern)))
    return query.order_by(Note.updated_at.desc(), Note.id.desc()).all()


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(note_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_note(db, note_id, current_user.id)


@router.put("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: int,
    note_in: NoteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    note = _get_owned_note(db, note_id, current_user.id)
    for field, value in note_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(note, field, value)
    db.commit()
    db.refresh(note)
    return note


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    note = _get_owned_note(db, note_id, current_user.id)
    db.delete(note)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
