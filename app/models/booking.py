import enum
import uuid
from sqlalchemy import Column, String, DateTime, func, DECIMAL, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.db.session import Base

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    USED = "used"

class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    theater_id = Column(Uuid(as_uuid=True), ForeignKey("theaters.id"), nullable=False, index=True)
    movie_id = Column(Uuid(as_uuid=True), ForeignKey("movies.id"), nullable=False, index=True)
    screen_id = Column(Uuid(as_uuid=True), ForeignKey("screens.id"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1) # seats booked
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    # Timezone-naive local time, same as the statistics date windows
    booking_time = Column(DateTime, server_default=func.now(), index=True)
    ticket_code = Column(String(20), nullable=True, index=True)
    status = Column(String(20), default=BookingStatus.PENDING.value, index=True)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User")
    theater = relationship("Theater", back_populates="bookings")
    movie = relationship("Movie")
    screen = relationship("Screen")
