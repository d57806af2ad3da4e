"""Tests for token helpers."""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from postboard.core.security import AuthContext, create_access_token, decode_access_token
from postboard.core.settings import settings


def test_round_trip_claims():
    token = create_access_token("user-7", email="seven@example.com")
    assert decode_access_token(token) == AuthContext(user_id="user-7", email="seven@example.com")


def test_email_is_optional():
    assert decode_access_token(create_access_token("user-7")).email is None


def test_expiry_claim_uses_settings():
    token = create_access_token("user-7")
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "user-7"
    assert "exp" in claims


def test_expired_token_rejected():
    token = create_access_token("user-7", expires_delta=timedelta(seconds=-5))
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_non_string_subject_rejected():
    token = jwt.encode({"sub": 12}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(JWTError):
        decode_access_token(token)
