"""User preferences schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Theme = Literal["light", "dark", "system"]


class UserPreferencesBase(BaseModel):
    theme: Theme = "system"
    locale: str = "pt-BR"


class UserPreferencesUpdate(BaseModel):
    theme: Optional[Theme] = None
    locale: Optional[str] = None


class UserPreferencesRead(UserPreferencesBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
