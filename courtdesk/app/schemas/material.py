"""Material inventory schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaterialBase(BaseModel):
    name: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    price: Decimal = Field(ge=0)
    purchase_date: date


class MaterialCreate(MaterialBase):
    pass


class MaterialUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    quantity: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    purchase_date: Optional[date] = None


class MaterialRead(MaterialBase):
    id: int
    owner_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
