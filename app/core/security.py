from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import bcrypt
import logging

from app.core.exceptions import AuthError

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"


def _password_bytes(password: str) -> bytes:
    # bcrypt only considers the first 72 bytes
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    return password_bytes


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt with configurable rounds."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def create_session_token(
    session_id: str,
    user_id: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
    issuer: str = "helping-hand",
) -> str:
    """Sign the cookie value that points at a server-side session."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=30))
    to_encode = {
        "sid": session_id,
        "sub": user_id,
        "type": SESSION_TOKEN_TYPE,
        "exp": expire,
        "iat": now,
        "iss": issuer,
    }
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def verify_session_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
    issuer: str = "helping-hand",
) -> dict:
    """Verify and decode a session cookie token."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm], issuer=issuer)
    except JWTError as e:
        logger.warning(f"Session token verification failed: {e}")
        raise AuthError("Not authenticated")

    if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("sid"):
        raise AuthError("Invalid session token")
    return payload
