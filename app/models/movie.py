import uuid
import enum
from sqlalchemy import Column, String, Integer, JSON, Uuid
from app.db.session import Base

class MovieStatus(str, enum.Enum):
    COMING_SOON = "coming_soon"
    NOW_SHOWING = "now_showing"
    ENDED = "ended"

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    genre = Column(JSON, nullable=True) # list of genre names
    language = Column(String(50), nullable=True)
    duration = Column(Integer, nullable=True) # minutes
    status = Column(String(20), default=MovieStatus.COMING_SOON.value, index=True)
