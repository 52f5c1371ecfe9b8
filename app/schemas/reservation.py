from pydantic import Field
from typing import Optional
from datetime import datetime
from app.models.reservation import ReservationStatus
from app.schemas.base import CamelModel
from app.schemas.donation import DonationResponse

class ReservationCreate(CamelModel):
    donation_id: str = Field(..., min_length=1)

class ReservationResponse(CamelModel):
    id: str
    donation_id: str
    receiver_id: str
    status: ReservationStatus
    created_at: Optional[datetime] = None

class ReservationWithDonation(ReservationResponse):
    donation: Optional[DonationResponse] = None
