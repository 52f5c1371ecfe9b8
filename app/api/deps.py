from typing import Generator, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.context import AppContext
from app.models.user import User


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(context: AppContext = Depends(get_context)) -> Generator[Session, None, None]:
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_session_token(request: Request, context: AppContext = Depends(get_context)) -> Optional[str]:
    return request.cookies.get(context.settings.SESSION_COOKIE_NAME)


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> User:
    """Resolve the session cookie to a user; raises AuthError (401) otherwise."""
    return context.session_store.resolve(db, token)
