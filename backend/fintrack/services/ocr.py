# fintrack/services/ocr.py
import io
import logging
import os
from typing import List

import pytesseract
from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from fintrack.core.config import settings

logger = logging.getLogger(__name__)

# images narrower than this are upscaled before recognition
MIN_OCR_WIDTH = 600


class TextRecognitionError(RuntimeError):
    """Raised when an image cannot be turned into text."""


def _configure_tesseract() -> None:
    """Apply TESSERACT_CMD (if set) to pytesseract."""
    cmd = settings.TESSERACT_CMD
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
        logger.debug("Configured pytesseract command: %s", cmd)


def preprocess_image_for_ocr(img: Image.Image) -> Image.Image:
    """
    Preprocess a PIL image in-memory to improve OCR accuracy:
      - auto-orient (if EXIF)
      - convert to L (grayscale)
      - upscale small images
      - mild denoise and autocontrast
    Returns the processed PIL image.
    """
    img = ImageOps.exif_transpose(img)

    if img.mode not in ("RGB", "RGBA", "L"):
        img = img.convert("RGB")
    gray = img.convert("L")

    w, h = gray.size
    if w < MIN_OCR_WIDTH:
        scale = max(1, int(MIN_OCR_WIDTH / max(1, w)))
        gray = gray.resize((w * scale, h * scale), Image.Resampling.LANCZOS)

    # small median filter to remove salt/pepper
    gray = gray.filter(ImageFilter.MedianFilter(size=3))
    return ImageOps.autocontrast(gray)


def split_lines(raw: str) -> List[str]:
    """Trim recognized text and drop blank lines."""
    return [ln.rstrip() for ln in (raw or "").splitlines() if ln.strip()]


def _recognize(img: Image.Image) -> str:
    _configure_tesseract()
    processed = preprocess_image_for_ocr(img)
    try:
        raw = pytesseract.image_to_string(processed, lang=settings.OCR_LANGUAGE)
    except pytesseract.TesseractNotFoundError as exc:
        raise TextRecognitionError("tesseract binary not found; install it or set TESSERACT_CMD") from exc
    except pytesseract.TesseractError as exc:
        raise TextRecognitionError(f"tesseract failed: {exc}") from exc
    return "\n".join(split_lines(raw)).strip()


def ocr_bytes_to_text(data: bytes) -> str:
    """Return recognized text for an in-memory image."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return _recognize(img)
    except UnidentifiedImageError as exc:
        raise TextRecognitionError("file is not a readable image") from exc
    except (OSError, Image.DecompressionBombError) as exc:
        # truncated or oversized images fail in load()
        raise TextRecognitionError(f"image could not be decoded: {exc}") from exc


def ocr_image_to_text(path: str) -> str:
    """
    Return recognized text for an image file.
    Raises TextRecognitionError if the file is missing, unreadable or OCR fails.
    """
    if not os.path.exists(path):
        raise TextRecognitionError(f"image not found: {path}")
    with open(path, "rb") as f:
        return ocr_bytes_to_text(f.read())


__all__ = ["TextRecognitionError", "ocr_bytes_to_text", "ocr_image_to_text", "preprocess_image_for_ocr", "split_lines"]
