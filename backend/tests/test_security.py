from datetime import timedelta

import pytest

from fintrack.services.security import (
    JWTError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_and_verify():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", None)


def test_verify_rejects_garbage_hash():
    assert not verify_password("secret123", "not-a-hash")


def test_token_round_trip():
    payload = decode_access_token(create_access_token(42))

    assert payload["sub"] == "42"
    assert payload["exp"] > payload["iat"]


def test_expired_token_rejected():
    token = create_access_token(1, expires_delta=timedelta(minutes=-5))

    with pytest.raises(JWTError):
        decode_access_token(token)
