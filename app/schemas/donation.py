from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from app.models.donation import Donation, DonationCategory, DonationStatus
from app.schemas.base import CamelModel

ANONYMOUS_DONOR = "Anonymous"

class DonationCreate(CamelModel):
    category: DonationCategory
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    availability_start: Optional[str] = None
    availability_end: Optional[str] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

class DonationUpdate(CamelModel):
    category: Optional[DonationCategory] = None
    title: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    availability_start: Optional[str] = None
    availability_end: Optional[str] = None
    status: Optional[DonationStatus] = None

class DonationResponse(CamelModel):
    id: str
    user_id: str
    category: DonationCategory
    title: str
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    availability_start: Optional[str] = None
    availability_end: Optional[str] = None
    status: DonationStatus
    created_at: Optional[datetime] = None

class DonationListItem(DonationResponse):
    donor_name: str = ANONYMOUS_DONOR

    @classmethod
    def from_donation(cls, donation: Donation, donor_name: Optional[str]):
        data = DonationResponse.model_validate(donation).model_dump()
        return cls(**data, donor_name=donor_name or ANONYMOUS_DONOR)

class DonationDetails(DonationListItem):
    donor_email: str = ""

    @classmethod
    def from_donation(cls, donation: Donation, donor_name: Optional[str], donor_email: Optional[str] = None):
        data = DonationResponse.model_validate(donation).model_dump()
        return cls(**data, donor_name=donor_name or ANONYMOUS_DONOR, donor_email=donor_email or "")

class RouteEstimateResponse(CamelModel):
    distance_km: float
    eta_minutes: int
    distance_label: str
    eta_label: str
