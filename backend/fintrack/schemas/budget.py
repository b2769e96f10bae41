# fintrack/schemas/budget.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal

from fintrack.db.models import BudgetPeriod, TransactionType


class BudgetBase(BaseModel):
    category: str = Field(..., min_length=1, max_length=150)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    type: TransactionType = TransactionType.expense
    period: BudgetPeriod = BudgetPeriod.monthly


class BudgetCreate(BudgetBase):
    pass


class BudgetUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1, max_length=150)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    type: Optional[TransactionType] = None
    period: Optional[BudgetPeriod] = None


class BudgetOut(BaseModel):
    id: int
    user_id: int
    category: str
    amount: float
    type: TransactionType
    period: BudgetPeriod

    model_config = ConfigDict(from_attributes=True)
