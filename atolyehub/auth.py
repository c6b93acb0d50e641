"""Bearer-token authentication of teachers."""

from __future__ import annotations

from typing import Optional

import jwt
from sqlalchemy import select
from sqlalchemy.orm import Session

from atolyehub.config import get_env
from atolyehub.models import Teacher

DEFAULT_SECRET = "secret"
_BEARER = "Bearer "
_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class AuthError(Exception):
    """Raised when a request cannot be authenticated."""

    status = 401


def secret_key() -> str:
    """Return the signing key from JWT_SECRET_KEY, or the built-in default."""
    return get_env("JWT_SECRET_KEY", DEFAULT_SECRET)


def authenticate(
    session: Session, authorization: Optional[str], key: Optional[str] = None
) -> Teacher:
    """Validate an Authorization header and return the teacher it names.

    The token must be HMAC-signed with ``key`` and carry the teacher's
    e-mail address in its ``sub`` claim.
    """
    if not authorization:
        raise AuthError("Authorization header gerekli")
    if not authorization.startswith(_BEARER):
        raise AuthError("Bearer token formatı hatalı")
    token = authorization[len(_BEARER):]

    if key is None:
        key = secret_key()
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=_HMAC_ALGORITHMS,
            options={"verify_aud": False, "verify_sub": False},
        )
    except jwt.PyJWTError as exc:
        raise AuthError("Geçersiz veya süresi dolmuş token") from exc

    if not isinstance(claims, dict):
        raise AuthError("Token claims okunamadı")

    email = claims.get("sub")
    if not isinstance(email, str) or not email:
        raise AuthError("Token içinde geçerli bir kullanıcı (sub) bulunamadı")

    teacher = session.scalars(
        select(Teacher).where(Teacher.email == email).order_by(Teacher.id)
    ).first()
    if teacher is None:
        raise AuthError("Token'a ait öğretmen veritabanında bulunamadı")
    return teacher