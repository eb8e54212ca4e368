import os

# Point the application engine at SQLite before anything imports app.db.session
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token
from app.models import User, Theater, Screen, Movie, Booking

engine_test = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine_test)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def clean_db():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine_test)
    yield
    Base.metadata.drop_all(bind=engine_test)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}
    return _headers


class Factory:
    """Small helpers to seed users, theaters, screens, movies and bookings."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, role="user", is_active=True):
        self._counter += 1
        return self._save(User(
            email=f"{role}{self._counter}@example.com",
            full_name=f"{role.title()} {self._counter}",
            role=role,
            is_active=is_active,
        ))

    def theater(self, manager=None, name="Galaxy Nguyen Du", location="District 1"):
        return self._save(Theater(
            manager_id=manager.id if manager else None,
            name=name,
            location=location,
            address="116 Nguyen Du",
            city="Ho Chi Minh City",
        ))

    def screen(self, theater, capacity=100, name="Screen 1"):
        return self._save(Screen(theater_id=theater.id, name=name, capacity=capacity))

    def movie(self, title="Dune: Part Two", genre=None):
        return self._save(Movie(title=title, genre=genre or ["Sci-Fi"]))

    def booking(
        self,
        theater,
        amount,
        booking_time,
        status="confirmed",
        payment_status="completed",
        movie=None,
        screen=None,
        customer=None,
        quantity=1,
    ):
        if movie is None:
            movie = self.movie()
        if customer is None:
            customer = self.user()
        return self._save(Booking(
            user_id=customer.id,
            theater_id=theater.id,
            movie_id=movie.id,
            screen_id=screen.id if screen else None,
            quantity=quantity,
            total_amount=Decimal(str(amount)),
            booking_time=booking_time,
            status=status,
            payment_status=payment_status,
        ))


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def staff(factory):
    return factory.user(role="staff")
