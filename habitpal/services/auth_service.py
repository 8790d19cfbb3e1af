import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.config import settings
from habitpal.models.user import User
from habitpal.services import user_service


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def issue_session_token(user_id: int) -> str:
    """Issue the signed token stored in the session cookie."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": "session",
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + timedelta(days=settings.SESSION_EXPIRE_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _decode_session_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise ValueError("Invalid or expired session")

    if payload.get("type") != "session":
        raise ValueError("Invalid session")

    return payload


async def verify_session_token(token: str, redis_client) -> int:
    """Validate a session token and return its user id."""
    payload = _decode_session_token(token)

    jti = payload.get("jti")
    if jti and await redis_client.get(f"revoked_session:{jti}"):
        raise ValueError("Session has been revoked")

    try:
        return int(payload["sub"])
    except (KeyError, ValueError):
        raise ValueError("Invalid session")


async def revoke_session_token(token: str, redis_client) -> bool:
    """Blacklist a session until it would have expired. Returns False for unusable tokens."""
    try:
        payload = _decode_session_token(token)
    except ValueError:
        return False

    jti = payload.get("jti")
    if not jti:
        return False

    ttl = int(payload["exp"] - datetime.now(timezone.utc).timestamp())
    await redis_client.setex(f"revoked_session:{jti}", max(ttl, 1), "1")
    return True


async def register_user(db: AsyncSession, username: str, password: str) -> User:
    """Register a new user with username/password."""
    existing = await user_service.get_user_by_username(db, username)
    if existing:
        raise ValueError("Username already exists")

    return await user_service.create_user(db, username, hash_password(password))


async def login(db: AsyncSession, username: str, password: str) -> User:
    """Authenticate user with username/password."""
    user = await user_service.get_user_by_username(db, username)

    if user is None or not verify_password(password, user.password):
        raise ValueError("Invalid username or password")

    return user
