"""Group class schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class TennisClassBase(BaseModel):
    name: str = Field(min_length=1)
    schedule: str = Field(min_length=1)
    days: list[Weekday] = []
    level: str = Field(min_length=1)
    observations: Optional[str] = None


class TennisClassCreate(TennisClassBase):
    student_ids: list[int] = []


class TennisClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    schedule: Optional[str] = Field(default=None, min_length=1)
    days: Optional[list[Weekday]] = None
    level: Optional[str] = Field(default=None, min_length=1)
    observations: Optional[str] = None
    student_ids: Optional[list[int]] = None


class RosterEntry(BaseModel):
    student_id: int
    student_name: str


class TennisClassRead(TennisClassBase):
    id: int
    owner_id: int
    created_at: datetime
    students: list[RosterEntry] = []

    model_config = ConfigDict(from_attributes=True)


class RosterUpdate(BaseModel):
    student_ids: list[int]


class QuickAddStudent(BaseModel):
    name: str = Field(min_length=1)
