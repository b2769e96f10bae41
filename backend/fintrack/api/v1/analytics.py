# fintrack/api/v1/analytics.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from datetime import date

from fintrack.api.v1.deps import get_current_user, get_db
from fintrack.db import models
from fintrack.schemas.analytics import BudgetComparison, CategoryTotal, DateTotal, Summary
from fintrack.services import dashboard
from sqlalchemy import func

router = APIRouter()


def _transactions(db: Session, user: models.User, start_date: Optional[date], end_date: Optional[date]):
    q = db.query(models.Transaction).filter(models.Transaction.user_id == user.id)
    if start_date:
        q = q.filter(models.Transaction.date >= start_date)
    if end_date:
        q = q.filter(models.Transaction.date <= end_date)
    return q.all()


@router.get("/summary", response_model=Summary)
def summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return dashboard.summarize(_transactions(db, current_user, start_date, end_date))


@router.get("/by_category", response_model=List[CategoryTotal])
def expenses_by_category(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return dashboard.expenses_by_category(_transactions(db, current_user, start_date, end_date))


@router.get("/by_date", response_model=List[DateTotal])
def expenses_by_date(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    q = db.query(models.Transaction.date.label("date"), func.sum(models.Transaction.amount).label("total")) \
        .filter(models.Transaction.user_id == current_user.id, models.Transaction.type == models.TransactionType.expense)
    if start_date:
        q = q.filter(models.Transaction.date >= start_date)
    if end_date:
        q = q.filter(models.Transaction.date <= end_date)
    q = q.group_by(models.Transaction.date).order_by(models.Transaction.date)
    return [{"date": r.date, "total": float(r.total or 0)} for r in q.all()]


@router.get("/budgets", response_model=List[BudgetComparison])
def budget_comparison(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    budgets = (
        db.query(models.Budget)
        .filter(models.Budget.user_id == current_user.id)
        .order_by(models.Budget.category.asc())
        .all()
    )
    return dashboard.compare_budgets(budgets, _transactions(db, current_user, start_date, end_date))
