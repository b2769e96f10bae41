# fintrack/api/v1/receipts.py
import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException, status
from fastapi.responses import FileResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user, get_db
from fintrack.db import models
from fintrack.schemas.receipt import ExtractedReceiptFields, ExtractionPreview, ReceiptOut, ReceiptUpdate
from fintrack.services import ocr, storage
from fintrack.services.receipt_extractor import extract_from_text

logger = logging.getLogger(__name__)
router = APIRouter()


def _read_upload(file: UploadFile) -> bytes:
    try:
        return file.file.read()
    finally:
        file.file.close()


def _recognize(content: bytes) -> str:
    try:
        return ocr.ocr_bytes_to_text(content)
    except ocr.TextRecognitionError as exc:
        logger.exception("Text recognition failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Text recognition failed")


def _get_owned(db: Session, receipt_id: int, user: models.User) -> models.Receipt:
    rec = (
        db.query(models.Receipt)
        .filter(models.Receipt.id == receipt_id, models.Receipt.user_id == user.id)
        .first()
    )
    if not rec:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return rec


@router.post("/extract", response_model=ExtractionPreview)
def extract_receipt(
    file: UploadFile = File(...),
    current_user: models.User = Depends(get_current_user),
):
    """Recognize and extract a draft record for review; nothing is stored."""
    raw_text = _recognize(_read_upload(file))
    return {"fields": extract_from_text(raw_text), "raw_text": raw_text}


@router.post("", response_model=ReceiptOut, status_code=status.HTTP_201_CREATED)
def upload_receipt(
    file: UploadFile = File(...),
    extracted_data: Optional[str] = Form(None),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Store a receipt image and its extracted fields.
    extracted_data is the (possibly user-corrected) JSON draft; when it is
    missing the server recognizes and extracts the image itself.
    """
    filename = os.path.basename(file.filename or "")
    if len(filename) == 0:
        raise HTTPException(status_code=400, detail="Missing filename")
    content = _read_upload(file)

    raw_text = None
    if extracted_data:
        try:
            fields = ExtractedReceiptFields.model_validate_json(extracted_data)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid extracted_data: {exc.errors()[0]['msg']}")
    else:
        raw_text = _recognize(content)
        fields = extract_from_text(raw_text)

    try:
        stored = storage.save_upload(current_user.id, filename, content)
    except OSError:
        logger.exception("Failed to store receipt image for user %s", current_user.id)
        raise HTTPException(status_code=500, detail="Failed to store receipt image")

    rec = models.Receipt(
        user_id=current_user.id,
        image_url=stored.url,
        file_path=stored.path,
        transaction_type=fields.transaction_type.value,
        recipient_name=fields.recipient_name,
        amount=fields.amount,
        currency=fields.currency,
        date=fields.date,
        reference_number=fields.reference_number,
        payment_method=fields.payment_method,
        account_number=fields.account_number,
        additional_details=fields.additional_details.model_dump_json(),
        raw_text=raw_text,
    )
    try:
        db.add(rec)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save receipt for user %s", current_user.id)
        storage.delete_upload(stored.path)
        raise HTTPException(status_code=500, detail="Failed to save receipt")
    db.refresh(rec)
    logger.info("Saved receipt %s for user %s", rec.id, current_user.id)
    return rec


@router.get("", response_model=List[ReceiptOut])
def list_receipts(
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return (
        db.query(models.Receipt)
        .filter(models.Receipt.user_id == current_user.id)
        .order_by(models.Receipt.date.desc(), models.Receipt.id.desc())
        .all()
    )


@router.get("/{receipt_id}", response_model=ReceiptOut)
def get_receipt(
    receipt_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_owned(db, receipt_id, current_user)


@router.put("/{receipt_id}", response_model=ReceiptOut)
def update_receipt(
    receipt_id: int,
    payload: ReceiptUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Apply the reviewer's corrections; unset fields keep their stored value."""
    rec = _get_owned(db, receipt_id, current_user)
    data = payload.model_dump(exclude_unset=True)

    if data.get("transaction_type") is not None:
        rec.transaction_type = payload.transaction_type.value
    if "additional_details" in data:
        details = payload.additional_details
        rec.additional_details = details.model_dump_json() if details is not None else None
    for field in ("recipient_name", "amount", "currency", "date", "reference_number", "payment_method"):
        if data.get(field) is not None:
            setattr(rec, field, data[field])
    if "account_number" in data:
        rec.account_number = data["account_number"]

    try:
        db.add(rec)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update receipt %s", receipt_id)
        raise HTTPException(status_code=500, detail="Failed to update receipt")
    db.refresh(rec)
    return rec


@router.get("/{receipt_id}/download")
def download_receipt(
    receipt_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rec = _get_owned(db, receipt_id, current_user)
    if not os.path.exists(rec.file_path):
        raise HTTPException(status_code=404, detail="File not found on disk")
    return FileResponse(rec.file_path, filename=os.path.basename(rec.file_path))


@router.delete("/{receipt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_receipt(
    receipt_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rec = _get_owned(db, receipt_id, current_user)

    # delete file (best-effort)
    try:
        storage.delete_upload(rec.file_path)
    except OSError:
        logger.exception("Failed to delete receipt file %s", rec.file_path)

    db.delete(rec)
    db.commit()
    return None
