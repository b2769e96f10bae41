# fintrack/cli.py — development/admin helpers
"""
Usage:
    fintrack-admin create-tables
    fintrack-admin reset-password <email> <new_password>
    fintrack-admin extract <image>
"""
import argparse
import logging
import sys

from fintrack.db import models
from fintrack.db.base import Base
from fintrack.db.session import SessionLocal, engine
from fintrack.services.ocr import TextRecognitionError, ocr_image_to_text
from fintrack.services.receipt_extractor import extract_from_text
from fintrack.services.security import hash_password

logger = logging.getLogger(__name__)


def create_tables(args) -> int:
    logger.info("Creating tables in the database (if not exist)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")
    return 0


def reset_password(args) -> int:
    db = SessionLocal()
    try:
        user = db.query(models.User).filter(models.User.email == args.email).first()
        if not user:
            print("User not found:", args.email)
            return 1
        user.hashed_password = hash_password(args.new_password)
        db.add(user)
        db.commit()
        print(f"Password reset for {args.email}")
        return 0
    finally:
        db.close()


def extract(args) -> int:
    try:
        text = ocr_image_to_text(args.image)
    except TextRecognitionError as exc:
        print(f"Text recognition failed: {exc}", file=sys.stderr)
        return 1
    print(extract_from_text(text).model_dump_json(indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fintrack-admin")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create-tables", help="create missing tables (development helper)")
    p.set_defaults(func=create_tables)

    p = sub.add_parser("reset-password", help="set a new password for a user")
    p.add_argument("email")
    p.add_argument("new_password")
    p.set_defaults(func=reset_password)

    p = sub.add_parser("extract", help="recognize a receipt image and print the extracted fields")
    p.add_argument("image")
    p.set_defaults(func=extract)
    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
