"""Student endpoints for CourtDesk."""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from courtdesk.app.core.settings import get_settings
from courtdesk.app.core.time import utc_now
from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.student import Student
from courtdesk.app.models.user import User
from courtdesk.app.schemas.invoice import InvoiceRead
from courtdesk.app.schemas.student import (
    InvoiceSyncRead,
    StudentCreate,
    StudentRead,
    StudentStatus,
    StudentUpdate,
    StudentUpdateResult,
)
from courtdesk.app.services.invoice_reconciliation import (
    SYNC_SKIPPED,
    FeeSyncResult,
    fee_change_requires_sync,
    sync_pending_invoice_amounts,
)
from courtdesk.app.services.invoices import list_student_invoices
from courtdesk.app.services.storage import (
    LocalObjectStorage,
    UploadRejected,
    document_key,
    get_storage,
    validate_document,
)

router = APIRouter(prefix="/students", tags=["students"])

# Columns that cannot be cleared by an explicit null in an update
_REQUIRED_FIELDS = {"name", "monthly_fee_type", "status"}


def _get_owned_student(db: Session, student_id: int, user_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id, Student.owner_id == user_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


@router.post("/", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def create_student(student_in: StudentCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    student = Student(owner_id=current_user.id, documents=[], **student_in.model_dump())
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


@router.get("/", response_model=list[StudentRead])
async def list_students(
    status: Optional[StudentStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Student).filter(Student.owner_id == current_user.id)
    if status:
        query = query.filter(Student.status == status)
    return query.order_by(Student.name.asc(), Student.id.asc()).all()


@router.get("/{student_id}", response_model=StudentRead)
async def get_student(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_student(db, student_id, current_user.id)


@router.put("/{student_id}", response_model=StudentUpdateResult)
async def update_student(
    student_id: int,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    student = _get_owned_student(db, student_id, current_user.id)
    previous_fee = student.monthly_fee_amount
    updates = student_in.model_dump(exclude_unset=True)
    for field, value in updates.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(student, field, value)
    db.commit()
    db.refresh(student)

    # The student edit stands even if the invoice sync below fails.
    new_fee = updates.get("monthly_fee_amount")
    if "monthly_fee_amount" in updates and fee_change_requires_sync(previous_fee, new_fee):
        sync = sync_pending_invoice_amounts(db, current_user.id, student.id, new_fee)
        db.refresh(student)
    else:
        sync = FeeSyncResult(status=SYNC_SKIPPED)

    result = StudentRead.model_validate(student).model_dump()
    return StudentUpdateResult(
        **result,
        invoice_sync=InvoiceSyncRead(status=sync.status, updated_count=sync.updated_count, message=sync.message),
    )


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    student = _get_owned_student(db, student_id, current_user.id)
    db.delete(student)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{student_id}/invoices", response_model=list[InvoiceRead])
async def list_invoices_for_student(
    student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    student = _get_owned_student(db, student_id, current_user.id)
    return list_student_invoices(db, current_user.id, student.id)


@router.post("/{student_id}/documents", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def upload_student_document(
    student_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: LocalObjectStorage = Depends(get_storage),
):
    student = _get_owned_student(db, student_id, current_user.id)
    data = await file.read()
    try:
        validate_document(len(data), get_settings().max_document_bytes)
        stored = storage.put(document_key(current_user.id, student.id, file.filename), data, file.content_type)
    except UploadRejected as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    document = {
        "name": file.filename or stored.key,
        "url": stored.url,
        "key": stored.key,
        "type": file.content_type,
        "size": stored.size,
        "uploaded_at": utc_now().isoformat(),
    }
    # Reassign so the JSON column is flagged as modified
    student.documents = [*(student.documents or []), document]
    db.commit()
    db.refresh(student)
    return student


@router.delete("/{student_id}/documents/{index}", response_model=StudentRead)
async def remove_student_document(
    student_id: int,
    index: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: LocalObjectStorage = Depends(get_storage),
):
    student = _get_owned_student(db, student_id, current_user.id)
    documents = list(student.documents or [])
    if index < 0 or index >= len(documents):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    removed = documents.pop(index)
    student.documents = documents
    db.commit()
    db.refresh(student)
    if removed.get("key"):
        storage.delete(removed["key"])
    return student
