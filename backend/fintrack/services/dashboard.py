# fintrack/services/dashboard.py
"""
Dashboard aggregates computed over in-memory collections of transactions
and budgets (ORM rows or anything with the same attributes).
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List

from fintrack.db.models import TransactionType


def _kind(value) -> str:
    # accepts the ORM enum or its plain string value
    return getattr(value, "value", value)


def category_of(txn) -> str:
    """Transactions are grouped by category, falling back to description."""
    return txn.category or txn.description or "Uncategorized"


def summarize(transactions: Iterable[Any]) -> Dict[str, float]:
    total_income = 0.0
    total_expenses = 0.0
    for t in transactions:
        if _kind(t.type) == TransactionType.income.value:
            total_income += float(t.amount)
        elif _kind(t.type) == TransactionType.expense.value:
            total_expenses += float(t.amount)
    return {
        "total_income": round(total_income, 2),
        "total_expenses": round(total_expenses, 2),
        "balance": round(total_income - total_expenses, 2),
    }


def expenses_by_category(transactions: Iterable[Any]) -> List[Dict[str, Any]]:
    totals: Dict[str, float] = defaultdict(float)
    for t in transactions:
        if _kind(t.type) == TransactionType.expense.value:
            totals[category_of(t)] += float(t.amount)
    rows = [{"category": c, "total": round(v, 2)} for c, v in totals.items()]
    rows.sort(key=lambda r: (-r["total"], r["category"]))
    return rows


def compare_budgets(budgets: Iterable[Any], transactions: Iterable[Any]) -> List[Dict[str, Any]]:
    """Budgeted amount vs actual total of same-type transactions in the budget's category."""
    txns = list(transactions)
    out = []
    for b in budgets:
        actual = sum(
            float(t.amount)
            for t in txns
            if _kind(t.type) == _kind(b.type) and category_of(t) == b.category
        )
        out.append({
            "category": b.category,
            "type": _kind(b.type),
            "period": _kind(b.period),
            "budgeted": float(b.amount),
            "actual": round(actual, 2),
        })
    return out
