
from app.db.session import Base
from app.models.user import User
from app.models.theater import Theater
from app.models.screen import Screen
from app.models.movie import Movie
from app.models.booking import Booking
