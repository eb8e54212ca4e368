import uuid
from sqlalchemy import Column, String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.db.session import Base

class Screen(Base):
    __tablename__ = "screens"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    theater_id = Column(Uuid(as_uuid=True), ForeignKey("theaters.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    screen_type = Column(String(50), nullable=True) # 'standard', 'imax', '4dx', ...
    capacity = Column(Integer, nullable=False)
    status = Column(String(20), default="active")

    # Relationships
    theater = relationship("Theater", back_populates="screens")
