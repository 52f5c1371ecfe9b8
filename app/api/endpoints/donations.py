from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from app.api.deps import get_context, get_current_user, get_db
from app.core.context import AppContext
from app.core.exceptions import ValidationError
from app.models.donation import DonationCategory
from app.models.user import User
from app.schemas.donation import (
    DonationCreate,
    DonationDetails,
    DonationListItem,
    DonationResponse,
    DonationUpdate,
    RouteEstimateResponse,
)
from app.services.route_estimator import estimate

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=DonationResponse)
def create_donation(
    donation: DonationCreate,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    current_user: User = Depends(get_current_user)
):
    """Create a donation owned by the current user."""
    return context.donations.create(db, current_user.id, donation.model_dump())

@router.get("", response_model=List[DonationListItem])
def list_available_donations(
    category: Optional[DonationCategory] = None,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """List donations that can still be reserved, with the donor's display name."""
    rows = context.donations.list_available(db, category=category)
    return [DonationListItem.from_donation(donation, donor_name) for donation, donor_name in rows]

@router.get("/mine", response_model=List[DonationResponse])
def list_my_donations(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    current_user: User = Depends(get_current_user)
):
    return context.donations.list_by_owner(db, current_user.id)

@router.put("/{donation_id}", response_model=DonationResponse)
def update_donation(
    donation_id: str,
    donation_update: DonationUpdate,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
    current_user: User = Depends(get_current_user)
):
    """Update a donation. Only its donor may edit it."""
    update_data = donation_update.model_dump(exclude_unset=True)
    return context.donations.update(db, donation_id, current_user.id, update_data)

@router.get("/{donation_id}/details", response_model=DonationDetails)
def get_donation_details(
    donation_id: str,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    donation, donor = context.donations.get_details(db, donation_id)
    return DonationDetails.from_donation(
        donation,
        donor.username if donor else None,
        donor.email if donor else None,
    )

@router.get("/{donation_id}/route", response_model=RouteEstimateResponse)
def get_route_estimate(
    donation_id: str,
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Straight-line distance and ETA from the receiver to the donation."""
    donation, _ = context.donations.get_details(db, donation_id)
    if not donation.has_location:
        raise ValidationError("Donation has no location")

    if (latitude is None) != (longitude is None):
        raise ValidationError("Provide both latitude and longitude")
    if latitude is None:
        latitude = context.settings.DEFAULT_RECEIVER_LATITUDE
        longitude = context.settings.DEFAULT_RECEIVER_LONGITUDE

    route = estimate(latitude, longitude, donation.latitude, donation.longitude)
    return RouteEstimateResponse(
        distance_km=route.distance_km,
        eta_minutes=route.eta_minutes,
        distance_label=route.distance_label,
        eta_label=route.eta_label,
    )
