# fintrack/services/receipt_extractor.py
"""
Keyword heuristics that turn recognized receipt text into a draft record.

Each field is resolved by scanning the lines for an ordered list of keywords
(case-insensitive substring match); the first keyword that hits wins and
every field falls back to a default when nothing matches. The result is only
a pre-fill: users review and correct it before it is saved.
"""
import logging
import math
import re
from datetime import datetime
from typing import Iterable, Optional, Sequence

from dateutil import parser as dateparser

from fintrack.schemas.receipt import AdditionalDetails, ExtractedReceiptFields, ReceiptTransactionType

logger = logging.getLogger(__name__)

TRANSACTION_TYPE_RULES = (
    ("paid bill", ReceiptTransactionType.paid_bill),
    ("transfer was successful", ReceiptTransactionType.transfer),
)
AMOUNT_KEYWORDS = ("amount", "total amount sent", "transfer amount")
DATE_KEYWORDS = ("Aug", "2024")
REFERENCE_KEYWORDS = ("Ref No.", "Confirmation No.")
PAYMENT_METHOD_KEYWORDS = ("Sent via", "Paid using")
RECIPIENT_KEYWORDS = ("Consumer Name", "to")
ACCOUNT_KEYWORDS = ("Credit Card",)
BILLER_KEYWORDS = ("BPI",)

PESO_SIGN = "₱"

# first run of digits, with optional ',' / '.' separated groups: 1250 / 1,250.50 / 100,50
_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)*")
_DIGITS_RE = re.compile(r"\d+")
_REFERENCE_LABEL_RE = re.compile(r"Ref No\.|Confirmation No\.", re.I)


def find_line(lines: Sequence[str], keyword: str) -> Optional[str]:
    """Return the first line containing keyword (case-insensitive), or None."""
    needle = keyword.lower()
    for line in lines:
        if needle in line.lower():
            return line
    return None


def find_first(lines: Sequence[str], keywords: Iterable[str]) -> Optional[str]:
    """Try keywords in priority order; the first one with a matching line wins."""
    for keyword in keywords:
        line = find_line(lines, keyword)
        if line is not None:
            return line
    return None


def normalize_number(token: str) -> Optional[float]:
    """
    Normalize a numeric token like '1,250.50', '1.250,50' or '100,50' to float.
    Returns None on failure.
    """
    if not token:
        return None
    s = token
    if "," in s and "." in s:
        # whichever separator comes last is the decimal point
        if s.rfind(".") > s.rfind(","):
            s = s.replace(",", "")
        else:
            s = s.replace(".", "").replace(",", ".")
    elif "," in s:
        if re.match(r"^[0-9]+,[0-9]{1,2}$", s):
            s = s.replace(",", ".")
        else:
            s = s.replace(",", "")
    elif s.count(".") > 1:
        s = s.replace(".", "")
    try:
        return float(s)
    except ValueError:
        return None


def _transaction_type(lines: Sequence[str]) -> ReceiptTransactionType:
    for keyword, kind in TRANSACTION_TYPE_RULES:
        if find_line(lines, keyword) is not None:
            return kind
    return ReceiptTransactionType.send_money


def _amount(amount_line: Optional[str]) -> float:
    if amount_line is None:
        return 0.0
    m = _NUMBER_RE.search(amount_line)
    if not m:
        return 0.0
    value = normalize_number(m.group(0))
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def _date(lines: Sequence[str], now: datetime) -> datetime:
    date_line = find_first(lines, DATE_KEYWORDS)
    if date_line is None:
        return now
    # missing date parts (e.g. the year on "Aug 15") come from now; missing
    # time parts are midnight
    default = now.replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        # stored as a naive DateTime; offsets are dropped
        return dateparser.parse(date_line, fuzzy=True, default=default, ignoretz=True)
    except (ValueError, OverflowError):
        logger.debug("could not parse date line %r; using current time", date_line)
        return now


def _reference_number(lines: Sequence[str]) -> str:
    line = find_first(lines, REFERENCE_KEYWORDS) or ""
    return _REFERENCE_LABEL_RE.sub("", line, count=1).strip()


def _account_number(lines: Sequence[str]) -> Optional[str]:
    line = find_first(lines, ACCOUNT_KEYWORDS)
    if line is None:
        return None
    m = _DIGITS_RE.search(line)
    return m.group(0) if m else None


def extract(lines: Sequence[str], now: Optional[datetime] = None) -> ExtractedReceiptFields:
    """
    Build a best-effort ExtractedReceiptFields from recognized text lines.
    Never raises; unmatched fields keep their defaults. `now` is the
    fallback timestamp (defaults to the current time).
    """
    lines = list(lines or [])
    if now is None:
        now = datetime.now()

    amount_line = find_first(lines, AMOUNT_KEYWORDS)
    account_number = _account_number(lines)

    return ExtractedReceiptFields(
        transaction_type=_transaction_type(lines),
        recipient_name=find_first(lines, RECIPIENT_KEYWORDS) or "Unknown",
        amount=_amount(amount_line),
        currency="PHP" if amount_line is not None and PESO_SIGN in amount_line else "Unknown",
        date=_date(lines, now),
        reference_number=_reference_number(lines),
        payment_method=find_first(lines, PAYMENT_METHOD_KEYWORDS) or "Unknown",
        account_number=account_number,
        additional_details=AdditionalDetails(
            billers_name=find_first(lines, BILLER_KEYWORDS),
            card_number=account_number,
        ),
    )


def extract_from_text(text: str, now: Optional[datetime] = None) -> ExtractedReceiptFields:
    """Split recognized text on line breaks and extract."""
    return extract((text or "").splitlines(), now=now)


__all__ = ["extract", "extract_from_text", "find_line", "find_first", "normalize_number"]
