"""Service-level tests against a temporary SQLite database."""
from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.donation import Donation, DonationCategory, DonationStatus
from app.models.reservation import Reservation, ReservationStatus
from app.models.user_session import UserSession
from app.services.donation_service import OWNER_TRANSITIONS
from helpers import PASSWORD, unique_email


@pytest.fixture
def donor(context, db):
    return context.users.signup(db, unique_email("donor"), "Dana", PASSWORD)


@pytest.fixture
def receiver(context, db):
    return context.users.signup(db, unique_email("receiver"), "Rui", PASSWORD)


@pytest.fixture
def donation(context, db, donor):
    return context.donations.create(db, donor.id, {
        "category": DonationCategory.FOOD,
        "title": "Apples",
        "latitude": 37.78,
        "longitude": -122.41,
    })


# Identity store

def test_signup_stores_a_hash(context, db):
    user = context.users.signup(db, "Mixed.Case@Example.com", "  Sam  ", PASSWORD)
    assert user.email == "mixed.case@example.com"
    assert user.username == "Sam"
    assert user.hashed_password != PASSWORD
    assert context.users.authenticate(db, "mixed.case@example.com", PASSWORD).id == user.id


def test_signup_rejects_duplicate_email_case_insensitively(context, db, donor):
    with pytest.raises(ValidationError):
        context.users.signup(db, donor.email.upper(), "Other", PASSWORD)


def test_signup_rejects_short_password(context, db):
    with pytest.raises(ValidationError):
        context.users.signup(db, unique_email(), "Short", "abc")


def test_authenticate_rejects_wrong_password(context, db, donor):
    with pytest.raises(AuthError):
        context.users.authenticate(db, donor.email, "wrong-password")


def test_authenticate_rejects_unknown_email(context, db):
    with pytest.raises(AuthError):
        context.users.authenticate(db, "nobody@example.com", PASSWORD)


# Sessions

def test_session_lifecycle(context, db, donor):
    store = context.session_store
    token = store.create(db, donor)
    assert store.resolve(db, token).id == donor.id

    assert store.destroy(db, token) is True
    with pytest.raises(AuthError):
        store.resolve(db, token)


def test_expired_session_is_rejected(context, db, donor):
    store = context.session_store
    token = store.create(db, donor)
    record = db.query(UserSession).filter(UserSession.user_id == donor.id).one()
    record.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    with pytest.raises(AuthError):
        store.resolve(db, token)
    assert store.purge_expired(db) == 1


def test_missing_token_is_rejected(context, db):
    with pytest.raises(AuthError):
        context.session_store.resolve(db, None)
    assert context.session_store.destroy(db, None) is False


# Donation visibility

def test_list_available_only_returns_available(context, db, donor, receiver, donation):
    reserved = context.donations.create(db, donor.id, {"category": DonationCategory.CLOTHES, "title": "Coat"})
    completed = context.donations.create(db, donor.id, {"category": DonationCategory.FOOD, "title": "Rice"})
    context.reservations.reserve(db, reserved.id, receiver.id)
    context.donations.update(db, completed.id, donor.id, {"status": DonationStatus.COMPLETED})

    rows = context.donations.list_available(db)

    assert [d.id for d, _ in rows] == [donation.id]
    assert all(d.status == DonationStatus.AVAILABLE for d, _ in rows)
    assert rows[0][1] == "Dana"


def test_list_available_filters_by_category(context, db, donor, donation):
    coat = context.donations.create(db, donor.id, {"category": DonationCategory.CLOTHES, "title": "Coat"})

    clothes = context.donations.list_available(db, category=DonationCategory.CLOTHES)

    assert [d.id for d, _ in clothes] == [coat.id]


def test_orphaned_donation_has_no_donor_name(context, db):
    db.add(Donation(user_id="deleted-user", category=DonationCategory.FOOD, title="Orphan"))
    db.commit()

    rows = context.donations.list_available(db)

    assert [(d.title, name) for d, name in rows] == [("Orphan", None)]


def test_get_details_unknown_id(context, db):
    with pytest.raises(NotFoundError):
        context.donations.get_details(db, "does-not-exist")


# Reservation workflow

def test_reserve_flips_status_and_records_receiver(context, db, receiver, donation):
    reservation = context.reservations.reserve(db, donation.id, receiver.id)

    assert reservation.donation_id == donation.id
    assert reservation.receiver_id == receiver.id
    assert reservation.status == ReservationStatus.PENDING
    db.refresh(donation)
    assert donation.status == DonationStatus.RESERVED

    mine = context.reservations.list_for_receiver(db, receiver.id)
    assert [r.donation.id for r in mine] == [donation.id]


def test_second_reservation_conflicts(context, db, donor, receiver, donation):
    context.reservations.reserve(db, donation.id, receiver.id)

    with pytest.raises(ConflictError):
        context.reservations.reserve(db, donation.id, donor.id)

    assert db.query(Reservation).filter(Reservation.donation_id == donation.id).count() == 1


def test_reserve_unknown_donation(context, db, receiver):
    with pytest.raises(NotFoundError):
        context.reservations.reserve(db, "does-not-exist", receiver.id)
    assert db.query(Reservation).count() == 0


def test_stale_read_cannot_double_reserve(context, donor, receiver, donation):
    """Two sessions both saw the donation as available; only the first reservation lands."""
    first = context.session_factory()
    second = context.session_factory()
    try:
        assert first.get(Donation, donation.id).status == DonationStatus.AVAILABLE
        assert second.get(Donation, donation.id).status == DonationStatus.AVAILABLE

        context.reservations.reserve(first, donation.id, receiver.id)
        with pytest.raises(ConflictError):
            context.reservations.reserve(second, donation.id, donor.id)

        assert second.query(Reservation).filter(Reservation.donation_id == donation.id).count() == 1
    finally:
        first.close()
        second.close()


# Owner updates

def test_update_by_non_owner_is_forbidden(context, db, receiver, donation):
    with pytest.raises(ForbiddenError):
        context.donations.update(db, donation.id, receiver.id, {"title": "Mine now"})


def test_update_unknown_donation(context, db, donor):
    with pytest.raises(NotFoundError):
        context.donations.update(db, "does-not-exist", donor.id, {"title": "x"})


def test_update_partial_fields(context, db, donor, donation):
    updated = context.donations.update(db, donation.id, donor.id, {
        "title": "  Green apples ",
        "availability_end": "6:00 PM",
    })
    assert updated.title == "Green apples"
    assert updated.availability_end == "6:00 PM"
    assert updated.latitude == 37.78


def test_update_rejects_blank_title(context, db, donor, donation):
    with pytest.raises(ValidationError):
        context.donations.update(db, donation.id, donor.id, {"title": "   "})


def test_owner_cannot_mark_reserved_directly(context, db, donor, donation):
    with pytest.raises(ConflictError):
        context.donations.update(db, donation.id, donor.id, {"status": DonationStatus.RESERVED})


def test_completing_closes_pending_reservations(context, db, donor, receiver, donation):
    reservation = context.reservations.reserve(db, donation.id, receiver.id)

    updated = context.donations.update(db, donation.id, donor.id, {"status": DonationStatus.COMPLETED})

    assert updated.status == DonationStatus.COMPLETED
    db.refresh(reservation)
    assert reservation.status == ReservationStatus.COMPLETED


def test_status_never_moves_backwards(context, db, donor, donation):
    context.donations.update(db, donation.id, donor.id, {"status": DonationStatus.COMPLETED})

    with pytest.raises(ConflictError):
        context.donations.update(db, donation.id, donor.id, {"status": DonationStatus.AVAILABLE})

    # Re-sending the current status is allowed
    same = context.donations.update(db, donation.id, donor.id, {"status": DonationStatus.COMPLETED})
    assert same.status == DonationStatus.COMPLETED


def test_transition_table_covers_every_status(context):
    assert set(OWNER_TRANSITIONS) == set(DonationStatus)
    for status in DonationStatus:
        context.donations.check_transition(status, status)
