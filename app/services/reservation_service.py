"""
Reservation workflow.

Reserving flips the donation from ``available`` to ``reserved`` and records
the receiver, in one transaction. The flip is a conditional update
(``WHERE status = 'available'``), so of two concurrent attempts exactly one
sees an affected row; the other gets a ConflictError.
"""
import logging
from typing import List
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConflictError, NotFoundError
from app.models.donation import Donation, DonationStatus
from app.models.reservation import Reservation, ReservationStatus

logger = logging.getLogger(__name__)


class ReservationService:
    """Reserve donations and list a receiver's reservations."""

    @staticmethod
    def reserve(db: Session, donation_id: str, receiver_id: str) -> Reservation:
        """
        Reserve a donation for a receiver.

        Args:
            db: Database session
            donation_id: Donation to reserve
            receiver_id: Authenticated user taking the donation

        Returns:
            The new pending Reservation

        Raises:
            NotFoundError: the donation does not exist
            ConflictError: the donation is no longer available
        """
        try:
            result = db.execute(
                update(Donation)
                .where(
                    Donation.id == donation_id,
                    Donation.status == DonationStatus.AVAILABLE,
                )
                .values(status=DonationStatus.RESERVED)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount != 1:
                exists = db.query(Donation.id).filter(Donation.id == donation_id).first()
                db.rollback()
                if not exists:
                    raise NotFoundError("Donation not found")
                logger.info(f"Reservation conflict on donation {donation_id} for receiver {receiver_id}")
                raise ConflictError("Donation is no longer available")

            reservation = Reservation(
                donation_id=donation_id,
                receiver_id=receiver_id,
                status=ReservationStatus.PENDING,
            )
            db.add(reservation)
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error reserving donation {donation_id}: {e}")
            db.rollback()
            raise

        db.refresh(reservation)
        logger.info(f"Donation {donation_id} reserved by receiver {receiver_id} (reservation {reservation.id})")
        return reservation

    @staticmethod
    def list_for_receiver(db: Session, receiver_id: str) -> List[Reservation]:
        """Reservations made by a receiver, each with its donation loaded."""
        return db.query(Reservation).options(
            joinedload(Reservation.donation)
        ).filter(
            Reservation.receiver_id == receiver_id
        ).order_by(Reservation.created_at.desc()).all()
