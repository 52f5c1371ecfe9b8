# Database models
from .user import User
from .donation import Donation, DonationCategory, DonationStatus
from .reservation import Reservation, ReservationStatus
from .user_session import UserSession
