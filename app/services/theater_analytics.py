from typing import List
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.models.theater import Theater
from app.schemas.theater_analytics import (
    TheaterRevenueAndCustomers,
    MyTheaterAnalytics,
    TheaterInfo,
    TheaterTotals,
    TheaterAnalyticsRow,
)


def _paid_filters(theater_id: UUID) -> list:
    # Only confirmed bookings with a completed payment count here
    return [
        Booking.theater_id == theater_id,
        Booking.status == BookingStatus.CONFIRMED.value,
        Booking.payment_status == PaymentStatus.COMPLETED.value,
    ]


def get_theater_revenue_and_customers(db: Session, theater_id: UUID) -> TheaterRevenueAndCustomers:
    """Total revenue, booking count and distinct customers for one theater."""
    row = (
        db.query(
            func.coalesce(func.sum(Booking.total_amount), 0).label("revenue"),
            func.count(Booking.id).label("bookings"),
            func.count(Booking.user_id.distinct()).label("customers"),
        )
        .filter(*_paid_filters(theater_id))
        .one()
    )
    return TheaterRevenueAndCustomers(
        theater_id=str(theater_id),
        total_revenue=float(row.revenue or 0),
        total_bookings=row.bookings or 0,
        total_customers=row.customers or 0,
    )


def get_all_theaters_revenue_and_customers(db: Session) -> List[TheaterAnalyticsRow]:
    results = []
    for theater in db.query(Theater).order_by(Theater.name).all():
        analytics = get_theater_revenue_and_customers(db, theater.id)
        results.append(
            TheaterAnalyticsRow(
                theater_id=str(theater.id),
                theater_name=theater.name,
                theater_location=theater.location,
                theater_city=theater.city,
                manager_id=str(theater.manager_id) if theater.manager_id else None,
                total_revenue=analytics.total_revenue,
                total_bookings=analytics.total_bookings,
                total_customers=analytics.total_customers,
            )
        )
    return results


def get_my_theater_analytics(db: Session, staff_id: UUID) -> MyTheaterAnalytics:
    theater = (
        db.query(Theater)
        .filter(Theater.manager_id == staff_id)
        .order_by(Theater.created_at, Theater.name)
        .first()
    )
    if not theater:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No theater found for this user",
        )

    analytics = get_theater_revenue_and_customers(db, theater.id)
    return MyTheaterAnalytics(
        theater_info=TheaterInfo(
            id=str(theater.id),
            name=theater.name,
            location=theater.location,
            city=theater.city,
            address=theater.address,
            status=theater.status,
        ),
        analytics=TheaterTotals(
            total_revenue=analytics.total_revenue,
            total_bookings=analytics.total_bookings,
            total_customers=analytics.total_customers,
        ),
    )
