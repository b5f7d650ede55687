"""Group class endpoints and roster management."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.student import Student
from courtdesk.app.models.tennis_class import ClassStudent, TennisClass
from courtdesk.app.models.user import User
from courtdesk.app.schemas.tennis_class import (
    QuickAddStudent,
    RosterEntry,
    RosterUpdate,
    TennisClassCreate,
    TennisClassRead,
    TennisClassUpdate,
)

router = APIRouter(prefix="/classes", tags=["classes"])


def _get_owned_class(db: Session, class_id: int, user_id: int) -> TennisClass:
    tennis_class = db.query(TennisClass).filter(TennisClass.id == class_id, TennisClass.owner_id == user_id).first()
    if not tennis_class:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return tennis_class


def _serialize(tennis_class: TennisClass) -> TennisClassRead:
    students = sorted(
        (RosterEntry(student_id=link.student_id, student_name=link.student.name) for link in tennis_class.roster),
        key=lambda entry: entry.student_name.lower(),
    )
    return TennisClassRead(
        id=tennis_class.id,
        owner_id=tennis_class.owner_id,
        name=tennis_class.name,
        schedule=tennis_class.schedule,
        days=tennis_class.days or [],
        level=tennis_class.level,
        observations=tennis_class.observations,
        created_at=tennis_class.created_at,
        students=students,
    )


def _replace_roster(db: Session, tennis_class: TennisClass, student_ids: list[int], user_id: int) -> None:
    wanted = set(student_ids)
    if wanted:
        owned = {
            row[0]
            for row in db.query(Student.id).filter(Student.owner_id == user_id, Student.id.in_(wanted)).all()
        }
        if owned != wanted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

    current = {link.student_id: link for link in tennis_class.roster}
    for student_id, link in current.items():
        if student_id not in wanted:
            tennis_class.roster.remove(link)
    for student_id in sorted(wanted - set(current)):
        tennis_class.roster.append(ClassStudent(owner_id=user_id, student_id=student_id))


@router.post("/", response_model=TennisClassRead, status_code=status.HTTP_201_CREATED)
async def create_class(class_in: TennisClassCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = class_in.model_dump(exclude={"student_ids"})
    tennis_class = TennisClass(owner_id=current_user.id, **data)
    db.add(tennis_class)
    _replace_roster(db, tennis_class, class_in.student_ids, current_user.id)
    db.commit()
    db.refresh(tennis_class)
    return _serialize(tennis_class)


@router.get("/", response_model=list[TennisClassRead])
async def list_classes(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    classes = (
        db.query(TennisClass)
        .filter(TennisClass.owner_id == current_user.id)
        .order_by(TennisClass.created_at.desc(), TennisClass.id.desc())
        .all()
    )
    return [_serialize(tennis_class) for tennis_class in classes]


@router.get("/{class_id}", response_model=TennisClassRead)
async def get_class(class_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _serialize(_get_owned_class(db, class_id, current_user.id))


@router.put("/{class_id}", response_model=TennisClassRead)
async def update_class(
    class_id: int,
    class_in: TennisClassUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tennis_class = _get_owned_class(db, class_id, current_user.id)
    updates = class_in.model_dump(exclude_unset=True)
    student_ids = updates.pop("student_ids", None)
    for field, value in updates.items():
        if value is None and field != "observations":
            continue
        setattr(tennis_class, field, value)
    if student_ids is not None:
        _replace_roster(db, tennis_class, student_ids, current_user.id)
    db.commit()
    db.refresh(tennis_class)
    return _serialize(tennis_class)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(class_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    tennis_class = _get_owned_class(db, class_id, current_user.id)
    db.delete(tennis_class)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{class_id}/students", response_model=TennisClassRead)
async def set_class_students(
    class_id: int,
    roster_in: RosterUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tennis_class = _get_owned_class(db, class_id, current_user.id)
    _replace_roster(db, tennis_class, roster_in.student_ids, current_user.id)
    db.commit()
    db.refresh(tennis_class)
    return _serialize(tennis_class)


@router.post("/{class_id}/students/quick-add", response_model=TennisClassRead, status_code=status.HTTP_201_CREATED)
async def quick_add_student(
    class_id: int,
    student_in: QuickAddStudent,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a bare active student and enrol them in the class in one step."""
    tennis_class = _get_owned_class(db, class_id, current_user.id)
    student = Student(owner_id=current_user.id, name=student_in.name.strip(), status="active", documents=[])
    db.add(student)
    db.flush()
    tennis_class.roster.append(ClassStudent(owner_id=current_user.id, student_id=student.id))
    db.commit()
    db.refresh(tennis_class)
    return _serialize(tennis_class)
