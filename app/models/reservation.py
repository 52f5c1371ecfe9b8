from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database.database import Base
from app.models.user import generate_id
import enum

class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"

class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=generate_id)
    donation_id = Column(String(36), ForeignKey("donations.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            native_enum=False,
            length=32,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    donation = relationship("Donation", back_populates="reservations")
    receiver = relationship("User", back_populates="reservations")
