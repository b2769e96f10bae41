# fintrack.api.v1 package - exports router modules so imports like
# "from fintrack.api.v1 import health, auth, transactions, budgets, receipts" work.
from . import analytics, auth, budgets, health, receipts, transactions

__all__ = ["analytics", "auth", "budgets", "health", "receipts", "transactions"]
