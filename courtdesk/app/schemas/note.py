"""Note schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NoteCategory = Literal["general", "students", "lessons", "finance", "materials", "reminders"]


class NoteBase(BaseModel):
    title: str = Field(min_length=1)
    content: str
    category: NoteCategory = "general"


class NoteCreate(NoteBase):
    """Schema for creating a note."""


class NoteUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    category: Optional[NoteCategory] = None


class NoteRead(NoteBase):
    """Schema for reading a note."""

    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
