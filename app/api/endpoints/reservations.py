from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging
from app.api.deps import get_context, get_current_user, get_db
from app.core.context import AppContext
from app.models.user import User
from app.schemas.reservation import ReservationCreate, ReservationResponse, ReservationWithDonation

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=ReservationResponse)
def create_reservation(
    reservation: ReservationCreate,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    current_user: User = Depends(get_current_user)
):
    """Reserve an available donation for the current user."""
    return context.reservations.reserve(db, reservation.donation_id, current_user.id)

@router.get("/mine", response_model=List[ReservationWithDonation])
def list_my_reservations(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    current_user: User = Depends(get_current_user)
):
    return context.reservations.list_for_receiver(db, current_user.id)
