# fintrack/schemas/receipt.py
import json
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReceiptTransactionType(str, Enum):
    paid_bill = "Paid Bill"
    transfer = "Transfer"
    send_money = "Send Money"


class AdditionalDetails(BaseModel):
    billers_name: Optional[str] = None
    card_number: Optional[str] = None


class ExtractedReceiptFields(BaseModel):
    """
    Best-effort draft of a receipt's transaction fields.
    Every field has a value; unmatched fields keep these defaults.
    """
    transaction_type: ReceiptTransactionType = ReceiptTransactionType.send_money
    recipient_name: str = "Unknown"
    amount: float = Field(0.0, ge=0)
    currency: str = "Unknown"
    date: datetime = Field(default_factory=datetime.now)
    reference_number: str = ""
    payment_method: str = "Unknown"
    account_number: Optional[str] = None
    additional_details: AdditionalDetails = Field(default_factory=AdditionalDetails)


class ExtractionPreview(BaseModel):
    fields: ExtractedReceiptFields
    raw_text: str


class ReceiptUpdate(BaseModel):
    transaction_type: Optional[ReceiptTransactionType] = None
    recipient_name: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, max_length=10)
    date: Optional[datetime] = None
    reference_number: Optional[str] = None
    payment_method: Optional[str] = None
    account_number: Optional[str] = None
    additional_details: Optional[AdditionalDetails] = None


class ReceiptOut(BaseModel):
    id: int
    user_id: int
    image_url: str
    transaction_type: str
    recipient_name: str
    amount: float
    currency: str
    date: datetime
    reference_number: str
    payment_method: str
    account_number: Optional[str] = None
    additional_details: Optional[AdditionalDetails] = None
    raw_text: Optional[str] = None
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("additional_details", mode="before")
    @classmethod
    def _load_details(cls, value):
        # stored as JSON text on the row
        if isinstance(value, str):
            return json.loads(value) if value.strip() else None
        return value
