from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional
import logging
from app.api.deps import get_context, get_current_user, get_db, get_session_token
from app.core.context import AppContext
from app.models.user import User
from app.schemas.user import MessageResponse, UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _set_session_cookie(response: Response, context: AppContext, token: str) -> None:
    settings = context.settings
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=context.session_store.max_age_seconds,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def _start_session(
    response: Response,
    user: User,
    db: Session,
    context: AppContext,
    previous_token: Optional[str],
) -> None:
    # Rotate: a login never reuses the session that came in with the request
    context.session_store.destroy(db, previous_token)
    token = context.session_store.create(db, user)
    _set_session_cookie(response, context, token)


@router.post("/signup", response_model=UserResponse)
def signup(
    payload: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    previous_token: Optional[str] = Depends(get_session_token),
):
    """Register a new account and log it in."""
    user = context.users.signup(db, payload.email, payload.username, payload.password)
    _start_session(response, user, db, context, previous_token)
    return user


@router.post("/login", response_model=UserResponse)
def login(
    payload: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    previous_token: Optional[str] = Depends(get_session_token),
):
    """Log in with email and password."""
    user = context.users.authenticate(db, payload.email, payload.password)
    _start_session(response, user, db, context, previous_token)
    logger.info(f"User logged in: {user.email}")
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    token: Optional[str] = Depends(get_session_token),
):
    """End the current session. Always succeeds, even without one."""
    if context.session_store.destroy(db, token):
        logger.info("Session destroyed on logout")
    response.delete_cookie(
        key=context.settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=context.settings.SESSION_COOKIE_SECURE,
        samesite=context.settings.SESSION_COOKIE_SAMESITE,
    )
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
