import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.db.session import Base

class TheaterStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"

class Theater(Base):
    __tablename__ = "theaters"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    manager_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=False, index=True)
    status = Column(String(20), default=TheaterStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    manager = relationship("User", back_populates="managed_theaters")
    screens = relationship("Screen", back_populates="theater", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="theater")
