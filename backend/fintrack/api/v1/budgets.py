# fintrack/api/v1/budgets.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from fintrack.schemas.budget import BudgetCreate, BudgetOut, BudgetUpdate
from fintrack.api.v1.deps import get_db, get_current_user
from fintrack.db import models

router = APIRouter()


def _get_owned(db: Session, budget_id: int, user: models.User) -> models.Budget:
    budget = db.query(models.Budget).filter(models.Budget.id == budget_id, models.Budget.user_id == user.id).first()
    if not budget:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    return budget


@router.post("", response_model=BudgetOut, status_code=status.HTTP_201_CREATED)
def create_budget(payload: BudgetCreate, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    new = models.Budget(
        user_id=current_user.id,
        category=payload.category,
        amount=payload.amount,
        type=payload.type,
        period=payload.period,
    )
    db.add(new)
    db.commit()
    db.refresh(new)
    return new


@router.get("", response_model=List[BudgetOut])
def list_budgets(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return (
        db.query(models.Budget)
        .filter(models.Budget.user_id == current_user.id)
        .order_by(models.Budget.category.asc())
        .all()
    )


@router.get("/{budget_id}", response_model=BudgetOut)
def get_budget(budget_id: int, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return _get_owned(db, budget_id, current_user)


@router.put("/{budget_id}", response_model=BudgetOut)
def update_budget(budget_id: int, payload: BudgetUpdate, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    budget = _get_owned(db, budget_id, current_user)
    if payload.category is not None:
        budget.category = payload.category
    if payload.amount is not None:
        budget.amount = payload.amount
    if payload.type is not None:
        budget.type = payload.type
    if payload.period is not None:
        budget.period = payload.period
    db.add(budget)
    db.commit()
    db.refresh(budget)
    return budget


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(budget_id: int, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    budget = _get_owned(db, budget_id, current_user)
    db.delete(budget)
    db.commit()
    return None
