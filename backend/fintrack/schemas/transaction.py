# fintrack/schemas/transaction.py
from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from typing import Optional, List
from decimal import Decimal

from fintrack.db.models import RecurrenceInterval, TransactionType


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=150)
    date: dt.date
    is_recurring: bool = False
    recurrence_interval: Optional[RecurrenceInterval] = None
    paid: bool = False


class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=150)
    date: Optional[dt.date] = None
    is_recurring: Optional[bool] = None
    recurrence_interval: Optional[RecurrenceInterval] = None
    paid: Optional[bool] = None


class TransactionOut(BaseModel):
    id: int
    user_id: int
    type: TransactionType
    amount: float
    description: Optional[str] = None
    category: Optional[str] = None
    date: dt.date
    is_recurring: bool
    recurrence_interval: Optional[RecurrenceInterval] = None
    paid: bool
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionPage(BaseModel):
    total: int
    page: int
    per_page: int
    items: List[TransactionOut]
