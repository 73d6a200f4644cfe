import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from staffhub.core.config import settings
from staffhub.db.session import get_db
from staffhub.models.user import User

logger = logging.getLogger(__name__)


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(
        plain_password.encode("utf-8"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # malformed stored hash, or a password bcrypt refuses to process
        return False


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """
    Signed, time-limited credential carrying the user id, email and role.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired access token")
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected invalid access token: %s", exc)
    return None


def resolve_user_from_token(db: Session, token: str | None) -> User | None:
    """
    Returns the user a bearer token refers to, or None when the token is
    missing, invalid, expired, or points at a user that no longer exists.
    """
    if not token:
        return None
    claims = decode_access_token(token)
    if not claims:
        return None
    try:
        user_id = uuid.UUID(str(claims.get("sub")))
    except ValueError:
        return None
    user = db.get(User, user_id)
    if user is None:
        logger.debug("Access token refers to missing user %s", user_id)
    return user


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_optional_user(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User | None:
    """
    Anonymous callers get None rather than a 401; operations that need an
    identity enforce it themselves through staffhub.core.rbac.
    """
    return resolve_user_from_token(db, bearer_token(authorization))
