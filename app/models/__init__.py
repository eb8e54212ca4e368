from app.models.user import User, UserRole
from app.models.theater import Theater, TheaterStatus
from app.models.screen import Screen
from app.models.movie import Movie, MovieStatus
from app.models.booking import Booking, BookingStatus, PaymentStatus
