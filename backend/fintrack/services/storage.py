# fintrack/services/storage.py
"""Local blob storage for uploaded receipt images."""
import logging
import os
import time
import uuid
from typing import NamedTuple

from fintrack.core.config import settings

logger = logging.getLogger(__name__)

# public URL prefix the app mounts UPLOAD_DIR under
UPLOAD_URL_PREFIX = "/uploads"


class StoredFile(NamedTuple):
    path: str  # absolute path on disk
    url: str


def ensure_user_upload_dir(user_id: int) -> str:
    d = os.path.join(settings.UPLOAD_DIR, str(user_id))
    os.makedirs(d, exist_ok=True)
    return d


def save_upload(user_id: int, filename: str, content: bytes) -> StoredFile:
    """
    Write content under UPLOAD_DIR/<user_id>/<timestamp>_<uuid8>_<basename>.
    Raises ValueError if filename is empty.
    """
    name = os.path.basename(filename or "")
    if not name:
        raise ValueError("Missing filename")

    user_dir = ensure_user_upload_dir(user_id)
    suffix = str(uuid.uuid4())[:8]
    save_name = f"{int(time.time())}_{suffix}_{name}"
    dest_path = os.path.join(user_dir, save_name)
    with open(dest_path, "wb") as f:
        f.write(content)
    logger.info("Stored upload for user %s at %s", user_id, dest_path)
    return StoredFile(path=dest_path, url=f"{UPLOAD_URL_PREFIX}/{user_id}/{save_name}")


def delete_upload(path: str) -> bool:
    """Remove a stored file. Returns False when it was already gone."""
    if not os.path.exists(path):
        return False
    os.remove(path)
    return True
