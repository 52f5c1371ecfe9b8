"""Identity store: signup and credential checks."""
import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import AuthError, ValidationError
from app.core.security import hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, settings: Settings):
        self.bcrypt_rounds = settings.BCRYPT_ROUNDS
        self.password_min_length = settings.PASSWORD_MIN_LENGTH

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def get(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.email) == self.normalize_email(email)).first()

    def signup(self, db: Session, email: str, username: str, password: str) -> User:
        """Create a user with a bcrypt-hashed password."""
        email = self.normalize_email(email)
        username = username.strip()
        if not email or not username or not password:
            raise ValidationError("All fields are required")
        if len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.password_min_length} characters"
            )
        if self.get_by_email(db, email):
            raise ValidationError("Email already registered")

        user = User(
            email=email,
            username=username,
            hashed_password=hash_password(password, rounds=self.bcrypt_rounds),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            db.rollback()
            raise ValidationError("Email already registered")
        db.refresh(user)

        logger.info(f"User signed up: {user.email}")
        return user

    def authenticate(self, db: Session, email: str, password: str) -> User:
        user = self.get_by_email(db, email)
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for: {email}")
            raise AuthError("Invalid email or password")
        return user
