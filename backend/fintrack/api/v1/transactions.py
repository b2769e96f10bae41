# fintrack/api/v1/transactions.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user, get_db
from fintrack.db import models
from fintrack.schemas.transaction import (
    TransactionCreate,
    TransactionOut,
    TransactionPage,
    TransactionType,
    TransactionUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_owned(db: Session, txn_id: int, user: models.User) -> models.Transaction:
    txn = db.query(models.Transaction).filter(models.Transaction.id == txn_id, models.Transaction.user_id == user.id).first()
    if not txn:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return txn


def _commit(db: Session, txn: models.Transaction, action: str) -> models.Transaction:
    try:
        db.add(txn)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s transaction", action)
        raise HTTPException(status_code=500, detail=f"Failed to {action} transaction")
    db.refresh(txn)
    return txn


@router.get("", response_model=TransactionPage)
def list_transactions(
    start_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, description="YYYY-MM-DD"),
    type: Optional[TransactionType] = Query(None, description="income or expense"),
    page: int = Query(1, ge=1),
    per_page: int = Query(25, ge=1, le=200),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Paginated list of transactions for current user, with optional date range and type filter.
    """
    q = db.query(models.Transaction).filter(models.Transaction.user_id == current_user.id)

    if start_date:
        q = q.filter(models.Transaction.date >= start_date)
    if end_date:
        q = q.filter(models.Transaction.date <= end_date)
    if type:
        q = q.filter(models.Transaction.type == type)

    total = q.count()
    items = (
        q.order_by(models.Transaction.date.desc(), models.Transaction.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return {"total": total, "page": page, "per_page": per_page, "items": items}


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = models.Transaction(
        user_id=current_user.id,
        type=payload.type,
        amount=payload.amount,
        description=payload.description,
        category=payload.category,
        date=payload.date,
        is_recurring=payload.is_recurring,
        # an interval only means something on recurring entries
        recurrence_interval=payload.recurrence_interval if payload.is_recurring else None,
        paid=payload.paid,
    )
    return _commit(db, txn, "create")


@router.get("/{txn_id}", response_model=TransactionOut)
def get_transaction(txn_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_owned(db, txn_id, current_user)


@router.put("/{txn_id}", response_model=TransactionOut)
def update_transaction(txn_id: int, payload: TransactionUpdate, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = _get_owned(db, txn_id, current_user)
    data = payload.model_dump(exclude_unset=True)

    if data.get("type") is not None:
        txn.type = data["type"]
    if data.get("amount") is not None:
        txn.amount = data["amount"]
    if "description" in data:
        txn.description = data["description"]
    if "category" in data:
        txn.category = data["category"]
    if data.get("date") is not None:
        txn.date = data["date"]
    if data.get("is_recurring") is not None:
        txn.is_recurring = data["is_recurring"]
    if "recurrence_interval" in data:
        txn.recurrence_interval = data["recurrence_interval"]
    if data.get("paid") is not None:
        txn.paid = data["paid"]
    if not txn.is_recurring:
        txn.recurrence_interval = None
    return _commit(db, txn, "update")


@router.post("/{txn_id}/paid", response_model=TransactionOut)
def mark_transaction_paid(txn_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = _get_owned(db, txn_id, current_user)
    txn.paid = True
    return _commit(db, txn, "update")


@router.delete("/{txn_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(txn_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    txn = _get_owned(db, txn_id, current_user)
    db.delete(txn)
    db.commit()
    return None
