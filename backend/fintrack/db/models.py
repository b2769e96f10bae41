# fintrack/db/models.py — User, Transaction, Budget, Receipt
from sqlalchemy import Boolean, Column, Integer, String, DateTime, func, Numeric, Text, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base
import enum


class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"


class RecurrenceInterval(str, enum.Enum):
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"


class BudgetPeriod(str, enum.Enum):
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=True, unique=False)
    email = Column(String(255), nullable=True, unique=True, index=True)
    hashed_password = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # relationships
    transactions = relationship(
        "Transaction", back_populates="user", cascade="all, delete-orphan"
    )
    budgets = relationship(
        "Budget", back_populates="user", cascade="all, delete-orphan"
    )
    receipts = relationship(
        "Receipt", back_populates="user", cascade="all, delete-orphan"
    )


class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=True)
    # free-form category; dashboard grouping falls back to description when empty
    category = Column(String(150), nullable=True, index=True)
    date = Column(Date, nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_interval = Column(Enum(RecurrenceInterval), nullable=True)
    paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="transactions")


class Budget(Base):
    __tablename__ = "budgets"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(150), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(Enum(TransactionType), nullable=False)
    period = Column(Enum(BudgetPeriod), nullable=False, default=BudgetPeriod.monthly)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="budgets")


class Receipt(Base):
    __tablename__ = "receipts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    image_url = Column(String(1024), nullable=False)
    file_path = Column(String(1024), nullable=False)
    transaction_type = Column(String(50), nullable=False, default="Send Money")
    recipient_name = Column(String(255), nullable=False, default="Unknown")
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="Unknown")
    date = Column(DateTime, nullable=False)
    reference_number = Column(String(255), nullable=False, default="")
    payment_method = Column(String(255), nullable=False, default="Unknown")
    account_number = Column(String(64), nullable=True)
    # JSON text; the persistence layer does not interpret it
    additional_details = Column(Text, nullable=True)
    raw_text = Column(Text, nullable=True)
    uploaded_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="receipts")
