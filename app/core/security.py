"""
Security: password hashing and JWT (best practices for APIs).
Challenge: Secure auth, no plain-text passwords, token validation that fails closed.
"""

from datetime import datetime, timezone, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, ValidationError

from app.config import get_settings
from app.core.errors import InvalidCredential, Unauthenticated

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Identity(BaseModel):
    """Verified claim set. `sub` is the user id; anything else in the payload is ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sub: int
    exp: int

    @property
    def user_id(self) -> int:
        return self.sub


def hash_password(password: str) -> str:
    """One-way hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def create_access_token(
    subject: str | int,
    extra: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
    secret_key: str | None = None,
) -> str:
    """Create JWT for authenticated user. Subject is the user id."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode = {"sub": str(subject), "exp": expire}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, secret_key or settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate JWT signature and expiry. Raises InvalidCredential."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidCredential() from exc


def verify_token(token: str | None) -> Identity:
    """Turn a raw bearer token into an Identity or raise."""
    if not token:
        raise Unauthenticated()
    payload = decode_access_token(token)
    try:
        return Identity.model_validate(payload)
    except ValidationError as exc:
        raise InvalidCredential() from exc
