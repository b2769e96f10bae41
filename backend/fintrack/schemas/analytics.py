# fintrack/schemas/analytics.py
from datetime import date
from pydantic import BaseModel


class Summary(BaseModel):
    total_income: float
    total_expenses: float
    balance: float


class CategoryTotal(BaseModel):
    category: str
    total: float


class DateTotal(BaseModel):
    date: date
    total: float


class BudgetComparison(BaseModel):
    category: str
    type: str
    period: str
    budgeted: float
    actual: float
