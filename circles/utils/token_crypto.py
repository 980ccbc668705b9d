"""
Password hashing and one-time token helpers.

Responsibilities:
- Hash account passwords with Argon2id and verify them in constant time
- Generate url-safe one-time tokens for e-mail verification and password reset
- Issue and decode the signed bearer tokens handed out on login
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type
from jose import JWTError, jwt

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)


@dataclass(frozen=True)
class TokenClaims:
    ext_id: str
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: Optional[str]) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(encoded_hash: str) -> bool:
    return _argon2.check_needs_rehash(encoded_hash)


def generate_url_token(length: int = 32) -> str:
    """Return a high-entropy url-safe token suitable for e-mail links."""
    return secrets.token_urlsafe(length)


def issue_access_token(ext_id: str, secret: str, *, ttl_days: int, algorithm: str = "HS256",
                       now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(UTC)
    payload = {
        "extId": ext_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(days=ttl_days)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, *, algorithm: str = "HS256") -> Optional[TokenClaims]:
    """Decode and verify a bearer token.

    Returns None if the signature is invalid, the token expired or the
    payload has no ``extId``.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None
    ext_id = payload.get("extId")
    if not ext_id or not isinstance(ext_id, str):
        return None
    exp = payload.get("exp")
    expires_at = datetime.fromtimestamp(exp, UTC) if isinstance(exp, (int, float)) else datetime.now(UTC)
    return TokenClaims(ext_id=ext_id, expires_at=expires_at)
