import json
import os

import pytest

from fintrack.services import ocr
from test_ocr import truncated_png_bytes

IMAGE = ("gcash.png", b"\x89PNG fake image bytes", "image/png")

DRAFT = {
    "transaction_type": "Paid Bill",
    "recipient_name": "Consumer Name: JUAN DELA CRUZ",
    "amount": 1250.5,
    "currency": "PHP",
    "date": "2024-08-15T10:30:00",
    "reference_number": "99887766",
    "payment_method": "Sent via GCash",
    "account_number": None,
    "additional_details": {"billers_name": "BPI", "card_number": None},
}

RECOGNIZED = "\n".join([
    "Paid bill",
    "Total Amount Sent: ₱1,250.50",
    "Sent via GCash",
    "Ref No. 99887766",
])


def _upload(client, headers, draft=DRAFT, file=IMAGE):
    data = {"extracted_data": json.dumps(draft)} if draft is not None else {}
    return client.post("/api/v1/receipts", files={"file": file}, data=data, headers=headers)


@pytest.fixture()
def fake_ocr(monkeypatch):
    calls = {"count": 0}

    def fake(content: bytes) -> str:
        calls["count"] += 1
        return RECOGNIZED

    monkeypatch.setattr(ocr, "ocr_bytes_to_text", fake)
    return calls


class TestUpload:
    def test_upload_with_reviewed_draft(self, client, auth_headers, upload_dir, fake_ocr):
        resp = _upload(client, auth_headers)
        assert resp.status_code == 201, resp.text
        body = resp.json()

        assert body["transaction_type"] == "Paid Bill"
        assert body["amount"] == 1250.5
        assert body["currency"] == "PHP"
        assert body["date"] == "2024-08-15T10:30:00"
        assert body["additional_details"] == {"billers_name": "BPI", "card_number": None}
        assert body["raw_text"] is None
        assert fake_ocr["count"] == 0

        user_id = body["user_id"]
        assert body["image_url"].startswith(f"/uploads/{user_id}/")
        stored = upload_dir / str(user_id) / os.path.basename(body["image_url"])
        assert stored.read_bytes() == IMAGE[1]

    def test_upload_without_draft_runs_extraction(self, client, auth_headers, fake_ocr):
        resp = _upload(client, auth_headers, draft=None)
        assert resp.status_code == 201, resp.text
        body = resp.json()

        assert fake_ocr["count"] == 1
        assert body["raw_text"] == RECOGNIZED
        assert body["transaction_type"] == "Paid Bill"
        assert body["amount"] == 1250.5
        assert body["currency"] == "PHP"
        assert body["reference_number"] == "99887766"
        assert body["payment_method"] == "Sent via GCash"

    def test_upload_reports_ocr_failure(self, client, auth_headers, upload_dir, monkeypatch):
        def boom(content: bytes) -> str:
            raise ocr.TextRecognitionError("tesseract binary not found")

        monkeypatch.setattr(ocr, "ocr_bytes_to_text", boom)

        resp = _upload(client, auth_headers, draft=None)
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Text recognition failed"
        assert list(upload_dir.iterdir()) == []

    def test_upload_rejects_invalid_draft(self, client, auth_headers):
        resp = client.post(
            "/api/v1/receipts",
            files={"file": IMAGE},
            data={"extracted_data": "{not json"},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    def test_upload_rejects_negative_amount(self, client, auth_headers):
        resp = _upload(client, auth_headers, draft={**DRAFT, "amount": -1})
        assert resp.status_code == 400

    def test_upload_requires_file(self, client, auth_headers):
        resp = client.post("/api/v1/receipts", data={"extracted_data": json.dumps(DRAFT)}, headers=auth_headers)
        assert resp.status_code == 422

    def test_partial_draft_uses_defaults(self, client, auth_headers):
        resp = _upload(client, auth_headers, draft={"amount": 10})
        assert resp.status_code == 201
        body = resp.json()
        assert body["transaction_type"] == "Send Money"
        assert body["recipient_name"] == "Unknown"
        assert body["reference_number"] == ""


class TestExtractPreview:
    def test_extract_returns_draft(self, client, auth_headers, fake_ocr):
        resp = client.post("/api/v1/receipts/extract", files={"file": IMAGE}, headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["raw_text"] == RECOGNIZED
        assert body["fields"]["transaction_type"] == "Paid Bill"
        assert body["fields"]["amount"] == 1250.5

        # nothing persisted
        assert client.get("/api/v1/receipts", headers=auth_headers).json() == []


class TestReceiptRecords:
    def test_list_ordered_by_date_desc(self, client, auth_headers):
        _upload(client, auth_headers, draft={**DRAFT, "date": "2024-08-01T00:00:00", "reference_number": "old"})
        _upload(client, auth_headers, draft={**DRAFT, "date": "2024-08-20T00:00:00", "reference_number": "new"})

        resp = client.get("/api/v1/receipts", headers=auth_headers)
        assert [r["reference_number"] for r in resp.json()] == ["new", "old"]

    def test_update_applies_corrections(self, client, auth_headers):
        receipt = _upload(client, auth_headers).json()

        resp = client.put(
            f"/api/v1/receipts/{receipt['id']}",
            json={"recipient_name": "Meralco", "amount": 1300, "account_number": "4321"},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["recipient_name"] == "Meralco"
        assert body["amount"] == 1300.0
        assert body["account_number"] == "4321"
        assert body["payment_method"] == "Sent via GCash"

    def test_update_rejects_unknown_transaction_type(self, client, auth_headers):
        receipt = _upload(client, auth_headers).json()
        resp = client.put(
            f"/api/v1/receipts/{receipt['id']}",
            json={"transaction_type": "Refund"},
            headers=auth_headers,
        )
        assert resp.status_code == 422

    def test_download(self, client, auth_headers):
        receipt = _upload(client, auth_headers).json()
        resp = client.get(f"/api/v1/receipts/{receipt['id']}/download", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.content == IMAGE[1]

    def test_delete_removes_file(self, client, auth_headers, upload_dir):
        receipt = _upload(client, auth_headers).json()
        stored = upload_dir / str(receipt["user_id"]) / os.path.basename(receipt["image_url"])
        assert stored.exists()

        resp = client.delete(f"/api/v1/receipts/{receipt['id']}", headers=auth_headers)
        assert resp.status_code == 204
        assert not stored.exists()
        assert client.get(f"/api/v1/receipts/{receipt['id']}", headers=auth_headers).status_code == 404

    def test_scoped_to_owner(self, client, auth_headers, other_headers):
        receipt = _upload(client, auth_headers).json()
        assert client.get(f"/api/v1/receipts/{receipt['id']}", headers=other_headers).status_code == 404
        assert client.delete(f"/api/v1/receipts/{receipt['id']}", headers=other_headers).status_code == 404
        assert client.get("/api/v1/receipts", headers=other_headers).json() == []


class TestUnreadableImage:
    def test_truncated_upload_reports_recognition_failure(self, client, auth_headers, upload_dir):
        resp = _upload(client, auth_headers, draft=None, file=("cut.png", truncated_png_bytes(), "image/png"))
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Text recognition failed"
        assert list(upload_dir.iterdir()) == []

    def test_truncated_preview_reports_recognition_failure(self, client, auth_headers):
        resp = client.post(
            "/api/v1/receipts/extract",
            files={"file": ("cut.png", truncated_png_bytes(), "image/png")},
            headers=auth_headers,
        )
        assert resp.status_code == 502
