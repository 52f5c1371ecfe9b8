"""
Donation store: creation, listing, details and owner updates.

Status moves forward only. Through ``update`` a donor may complete a
donation; the ``reserved`` state is only ever entered through the
reservation workflow.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import update as sql_update
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.donation import Donation, DonationCategory, DonationStatus
from app.models.reservation import Reservation, ReservationStatus
from app.models.user import User

logger = logging.getLogger(__name__)

# Target states an owner may move a donation into by editing it
OWNER_TRANSITIONS = {
    DonationStatus.AVAILABLE: {DonationStatus.COMPLETED},
    DonationStatus.RESERVED: {DonationStatus.COMPLETED},
    DonationStatus.COMPLETED: set(),
}

UPDATABLE_FIELDS = (
    "category",
    "title",
    "description",
    "latitude",
    "longitude",
    "availability_start",
    "availability_end",
)


class DonationService:
    """Queries and owner-side mutations for donations."""

    @staticmethod
    def create(db: Session, owner_id: str, data: Dict[str, Any]) -> Donation:
        if not data.get("category") or not data.get("title"):
            raise ValidationError("Category and title are required")

        donation = Donation(
            user_id=owner_id,
            status=DonationStatus.AVAILABLE,
            **{field: data.get(field) for field in UPDATABLE_FIELDS},
        )
        db.add(donation)
        db.commit()
        db.refresh(donation)

        logger.info(f"Donation created: {donation.id} ({donation.category.value}) by user: {owner_id}")
        return donation

    @staticmethod
    def get(db: Session, donation_id: str) -> Optional[Donation]:
        return db.query(Donation).filter(Donation.id == donation_id).first()

    @staticmethod
    def list_available(
        db: Session, category: Optional[DonationCategory] = None
    ) -> List[Tuple[Donation, Optional[str]]]:
        """Available donations paired with the owner's username (None when the owner row is gone)."""
        query = db.query(Donation, User.username).outerjoin(
            User, Donation.user_id == User.id
        ).filter(Donation.status == DonationStatus.AVAILABLE)
        if category is not None:
            query = query.filter(Donation.category == category)
        return query.order_by(Donation.created_at.desc()).all()

    @staticmethod
    def list_by_owner(db: Session, owner_id: str) -> List[Donation]:
        return db.query(Donation).filter(
            Donation.user_id == owner_id
        ).order_by(Donation.created_at.desc()).all()

    @staticmethod
    def get_details(db: Session, donation_id: str) -> Tuple[Donation, Optional[User]]:
        row = db.query(Donation, User).outerjoin(
            User, Donation.user_id == User.id
        ).filter(Donation.id == donation_id).first()
        if not row:
            raise NotFoundError("Donation not found")
        return row[0], row[1]

    @staticmethod
    def check_transition(current: DonationStatus, target: DonationStatus) -> None:
        if target == current:
            return
        if target not in OWNER_TRANSITIONS[current]:
            raise ConflictError(
                f"Cannot change donation status from {current.value} to {target.value}"
            )

    @staticmethod
    def _advance_status(db: Session, donation: Donation, target: DonationStatus) -> None:
        # Guard on the status we validated against so a concurrent reservation is not overwritten
        current = donation.status
        result = db.execute(
            sql_update(Donation)
            .where(Donation.id == donation.id, Donation.status == current)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            raise ConflictError("Donation status changed, reload and try again")

        if target == DonationStatus.COMPLETED:
            closed = db.execute(
                sql_update(Reservation)
                .where(
                    Reservation.donation_id == donation.id,
                    Reservation.status == ReservationStatus.PENDING,
                )
                .values(status=ReservationStatus.COMPLETED)
                .execution_options(synchronize_session=False)
            ).rowcount
            logger.info(f"Donation {donation.id} completed; closed {closed} reservation(s)")

    def update(self, db: Session, donation_id: str, actor_id: str, data: Dict[str, Any]) -> Donation:
        """Apply a partial update from the donation's owner."""
        donation = self.get(db, donation_id)
        if not donation:
            raise NotFoundError("Donation not found")
        if donation.user_id != actor_id:
            raise ForbiddenError("Only the donor can edit this donation")

        if "title" in data and not (data["title"] or "").strip():
            raise ValidationError("Title cannot be empty")
        if "category" in data and data["category"] is None:
            raise ValidationError("Category cannot be empty")

        target = data.get("status")
        if target is not None:
            target = DonationStatus(target)
            self.check_transition(donation.status, target)

        for field in UPDATABLE_FIELDS:
            if field in data:
                value = data[field]
                if field == "title":
                    value = value.strip()
                setattr(donation, field, value)

        if target is not None and target != donation.status:
            self._advance_status(db, donation, target)

        db.commit()
        db.refresh(donation)

        logger.info(f"Donation updated: {donation.id} by user: {actor_id}")
        return donation
