"""
Database-backed login sessions.

The cookie value is a signed token carrying the session id; the row in
``user_sessions`` is what makes it valid, so logout is a delete.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import AuthError
from app.core.security import create_session_token, verify_session_token
from app.models.user import User
from app.models.user_session import UserSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Create, resolve and destroy login sessions."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.max_age = timedelta(days=settings.SESSION_MAX_AGE_DAYS)

    @property
    def max_age_seconds(self) -> int:
        return int(self.max_age.total_seconds())

    def create(self, db: Session, user: User) -> str:
        """Persist a new session for ``user`` and return the signed cookie value."""
        session_id = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + self.max_age
        db.add(UserSession(id=session_id, user_id=user.id, expires_at=expires_at))
        db.commit()
        logger.info(f"Session created for user: {user.email}")
        return create_session_token(
            session_id,
            user.id,
            self.secret_key,
            algorithm=self.algorithm,
            expires_delta=self.max_age,
        )

    def resolve(self, db: Session, token: Optional[str]) -> User:
        """Return the user behind a cookie value, or raise AuthError."""
        if not token:
            raise AuthError("Not authenticated")

        payload = verify_session_token(token, self.secret_key, algorithm=self.algorithm)
        now = datetime.now(timezone.utc)
        record = db.query(UserSession).filter(
            UserSession.id == payload["sid"],
            UserSession.expires_at > now,
        ).first()
        if not record:
            raise AuthError("Session expired")

        user = db.query(User).filter(User.id == record.user_id).first()
        if not user:
            raise AuthError("User not found")
        return user

    def destroy(self, db: Session, token: Optional[str]) -> bool:
        """Delete the session behind a cookie value; unknown or invalid tokens are ignored."""
        if not token:
            return False
        try:
            payload = verify_session_token(token, self.secret_key, algorithm=self.algorithm)
        except AuthError:
            return False

        result = db.execute(
            delete(UserSession)
            .where(UserSession.id == payload["sid"])
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount > 0

    def purge_expired(self, db: Session) -> int:
        result = db.execute(
            delete(UserSession)
            .where(UserSession.expires_at <= datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        db.commit()
        count = result.rowcount
        if count:
            logger.info(f"Purged {count} expired session(s)")
        return count
