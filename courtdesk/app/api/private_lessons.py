"""Private lesson scheduling endpoints."""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.private_lesson import PrivateLesson
from courtdesk.app.models.student import Student
from courtdesk.app.models.user import User
from courtdesk.app.schemas.private_lesson import PrivateLessonCreate, PrivateLessonRead, PrivateLessonUpdate

router = APIRouter(prefix="/private-lessons", tags=["private-lessons"])


def _get_owned_lesson(db: Session, lesson_id: int, user_id: int) -> PrivateLesson:
    lesson = db.query(PrivateLesson).filter(PrivateLesson.id == lesson_id, PrivateLesson.owner_id == user_id).first()
    if not lesson:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Private lesson not found")
    return lesson


def _resolve_student_name(db: Session, user_id: int, student_id: Optional[int], student_name: Optional[str]) -> str:
    if student_id is not None:
        student = db.query(Student).filter(Student.id == student_id, Student.owner_id == user_id).first()
        if not student:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        return student.name
    if not student_name or not student_name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="student_id or student_name is required")
    return student_name.strip()


@router.post("/", response_model=PrivateLessonRead, status_code=status.HTTP_201_CREATED)
async def create_private_lesson(
    lesson_in: PrivateLessonCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = lesson_in.model_dump()
    data["student_name"] = _resolve_student_name(db, current_user.id, lesson_in.student_id, lesson_in.student_name)
    lesson = PrivateLesson(owner_id=current_user.id, **data)
    db.add(lesson)
    db.commit()
    db.refresh(lesson)
    return lesson


@router.get("/", response_model=list[PrivateLessonRead])
async def list_private_lessons(
    lesson_date: Optional[dt.date] = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(PrivateLesson).filter(PrivateLesson.owner_id == current_user.id)
    if lesson_date:
        query = query.filter(PrivateLesson.date == lesson_date)
    return query.order_by(PrivateLesson.date.asc(), PrivateLesson.time.asc(), PrivateLesson.id.asc()).all()


@router.get("/{lesson_id}", response_model=PrivateLessonRead)
async def get_private_lesson(lesson_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_lesson(db, lesson_id, current_user.id)


@router.put("/{lesson_id}", response_model=PrivateLessonRead)
async def update_private_lesson(
    lesson_id: int,
    lesson_in: PrivateLessonUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lesson = _get_owned_lesson(db, lesson_id, current_user.id)
    updates = lesson_in.model_dump(exclude_unset=True)
    if "student_id" in updates or "student_name" in updates:
        student_id = updates.get("student_id", lesson.student_id)
        student_name = updates.get("student_name") or (None if "student_id" in updates else lesson.student_name)
        updates["student_id"] = student_id
        updates["student_name"] = _resolve_student_name(db, current_user.id, student_id, student_name)
    for field, value in updates.items():
        if value is None and field not in ("student_id", "notes"):
            continue
        setattr(lesson, field, value)
    db.commit()
    db.refresh(lesson)
    return lesson


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_private_lesson(lesson_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    lesson = _get_owned_lesson(db, lesson_id, current_user.id)
    db.delete(lesson)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
