from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database.database import Base
from app.models.user import generate_id
import enum

class DonationCategory(str, enum.Enum):
    FOOD = "food"
    CLOTHES = "clothes"

class DonationStatus(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    COMPLETED = "completed"


def _enum_values(enum_cls):
    # Persist the lowercase values, not the member names
    return [member.value for member in enum_cls]


class Donation(Base):
    __tablename__ = "donations"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    category = Column(
        Enum(DonationCategory, name="donation_category", values_callable=_enum_values),
        nullable=False,
    )
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    availability_start = Column(Text, nullable=True)  # display label, e.g. "9:00 AM"
    availability_end = Column(Text, nullable=True)
    status = Column(
        Enum(DonationStatus, name="donation_status", values_callable=_enum_values),
        nullable=False,
        default=DonationStatus.AVAILABLE,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    owner = relationship("User", back_populates="donations")
    reservations = relationship("Reservation", back_populates="donation")

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None
