"""Concurrent reservation attempts from several threads, each with its own session."""
import os
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core.config import Settings
from app.core.context import AppContext
from app.core.exceptions import ConflictError
from app.database.database import init_db
from app.models.donation import Donation, DonationCategory, DonationStatus
from app.models.reservation import Reservation
from helpers import PASSWORD, unique_email

ATTEMPTS = 8


@pytest.fixture
def pg_context(require_db):
    settings = Settings(_env_file=None, DATABASE_URL=os.environ["DATABASE_URL"], BCRYPT_ROUNDS=4, LOG_FILE="")
    ctx = AppContext.from_settings(settings)
    init_db(ctx.engine)
    yield ctx
    ctx.dispose()


def race_for_one_donation(ctx):
    """Let ATTEMPTS receivers reserve the same donation at once; return outcomes and the donation id."""
    db = ctx.session_factory()
    try:
        donor = ctx.users.signup(db, unique_email("donor"), "Dana", PASSWORD)
        receivers = [
            ctx.users.signup(db, unique_email("receiver"), f"R{i}", PASSWORD).id
            for i in range(ATTEMPTS)
        ]
        donation = ctx.donations.create(db, donor.id, {"category": DonationCategory.FOOD, "title": "Race"})
        donation_id = donation.id
    finally:
        db.close()

    barrier = threading.Barrier(ATTEMPTS)

    def attempt(receiver_id):
        session = ctx.session_factory()
        try:
            barrier.wait()
            ctx.reservations.reserve(session, donation_id, receiver_id)
            return "reserved"
        except ConflictError:
            return "conflict"
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=ATTEMPTS) as pool:
        outcomes = list(pool.map(attempt, receivers))
    return outcomes, donation_id


def assert_single_winner(ctx, outcomes, donation_id):
    assert outcomes.count("reserved") == 1
    assert outcomes.count("conflict") == ATTEMPTS - 1

    db = ctx.session_factory()
    try:
        assert db.query(Reservation).filter(Reservation.donation_id == donation_id).count() == 1
        assert db.get(Donation, donation_id).status == DonationStatus.RESERVED
    finally:
        db.close()


def test_concurrent_reservations_have_one_winner_sqlite(context):
    outcomes, donation_id = race_for_one_donation(context)
    assert_single_winner(context, outcomes, donation_id)


def test_concurrent_reservations_have_one_winner(pg_context):
    outcomes, donation_id = race_for_one_donation(pg_context)
    assert_single_winner(pg_context, outcomes, donation_id)
