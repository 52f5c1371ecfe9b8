"""
Per-application handles: settings, database engine, session factory and services.

``create_app`` builds one AppContext and stores it on ``app.state.context``;
request dependencies read it from there instead of importing module globals.
"""
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.database.database import build_engine, build_session_factory
from app.services.donation_service import DonationService
from app.services.reservation_service import ReservationService
from app.services.session_store import SessionStore
from app.services.user_service import UserService


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    session_store: SessionStore
    users: UserService
    donations: DonationService
    reservations: ReservationService

    @classmethod
    def from_settings(cls, settings: Settings, engine: Optional[Engine] = None) -> "AppContext":
        engine = engine or build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            session_store=SessionStore(settings),
            users=UserService(settings),
            donations=DonationService(),
            reservations=ReservationService(),
        )

    def dispose(self) -> None:
        self.engine.dispose()
