"""Bearer token helpers built on python-jose."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from postboard.core.settings import settings

__all__ = ["AuthContext", "create_access_token", "decode_access_token"]


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a verified bearer token."""

    user_id: str
    email: str | None = None


def create_access_token(
    user_id: str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT whose subject is ``user_id``."""
    to_encode: dict[str, object] = {"sub": user_id}
    if email is not None:
        to_encode["email"] = email
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> AuthContext:
    """Verify ``token`` and return the identity it carries.

    Raises:
        JWTError: If the signature or expiry is invalid, or the subject is missing.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise JWTError("Token has no subject")
    email = payload.get("email")
    return AuthContext(user_id=subject, email=email if isinstance(email, str) else None)
