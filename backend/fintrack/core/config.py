# fintrack/core/config.py
# Simple config loader: environment variables, optionally from a .env file
import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


class SimpleSettings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fintrack.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # local blob storage for receipt images
    UPLOAD_DIR = os.path.abspath(os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads")))

    # text recognition
    TESSERACT_CMD = os.getenv("TESSERACT_CMD") or None
    OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")

    CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


settings = SimpleSettings()
