"""Private lesson schemas."""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

LessonType = Literal["regular", "makeup", "trial"]


class PrivateLessonBase(BaseModel):
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    date: dt.date
    time: dt.time
    type: LessonType = "regular"
    notes: Optional[str] = None


class PrivateLessonCreate(PrivateLessonBase):
    pass


class PrivateLessonUpdate(BaseModel):
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    type: Optional[LessonType] = None
    notes: Optional[str] = None


class PrivateLessonRead(PrivateLessonBase):
    id: int
    owner_id: int
    student_name: str
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)
