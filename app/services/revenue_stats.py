import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_, asc, desc, extract, func
from sqlalchemy.orm import Session

from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.models.movie import Movie
from app.models.screen import Screen
from app.models.theater import Theater
from app.schemas.common import Pagination
from app.schemas.revenue import (
    RevenueStatsQuery,
    RevenueStatsItem,
    RevenueStatsSummary,
    RevenueStatsPaginatedResponse,
    DateRange,
    TheaterInfo,
    MovieInfo,
    TopTheater,
    TopMovie,
)
from app.utils.periods import PeriodWindow, plan_period_window, format_bucket_label

logger = logging.getLogger(__name__)

# (status, payment_status) pairs that represent collected revenue
REVENUE_STATUS_PAIRS = (
    (BookingStatus.CONFIRMED, PaymentStatus.COMPLETED),
    (BookingStatus.COMPLETED, PaymentStatus.COMPLETED),
    (BookingStatus.USED, PaymentStatus.COMPLETED),
)

# Extra bucket key per group_by; "date" groups by time only
ENTITY_COLUMNS = {
    "theater": Booking.theater_id,
    "movie": Booking.movie_id,
}

TWO_PLACES = Decimal("0.01")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def round2(value) -> float:
    """Round half away from zero to 2 decimal places."""
    return float(Decimal(str(value or 0)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def ratio(numerator, denominator, scale: int = 1) -> float:
    if not denominator:
        return 0.0
    return round2(Decimal(str(numerator or 0)) * scale / Decimal(str(denominator)))


def _parse_uuid(value: Optional[str]) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _revenue():
    return func.coalesce(func.sum(Booking.total_amount), 0)


def _tickets():
    return func.coalesce(func.sum(Booking.quantity), 0)


def _capacity():
    return func.coalesce(func.sum(Screen.capacity), 0)


def resolve_managed_theater_ids(
    db: Session, staff_id: UUID, theater_id: Optional[str] = None
) -> List[UUID]:
    """Theaters managed by the staff member, optionally narrowed to one theater."""
    query = db.query(Theater.id).filter(Theater.manager_id == staff_id)
    if theater_id is not None:
        wanted = _parse_uuid(theater_id)
        if wanted is None:
            return []
        query = query.filter(Theater.id == wanted)
    return [row.id for row in query.all()]


def revenue_filters(
    theater_ids: List[UUID], window: PeriodWindow, movie_id: Optional[UUID] = None
) -> list:
    """Predicate shared by the count, data and summary passes."""
    filters = [
        Booking.theater_id.in_(theater_ids),
        Booking.booking_time >= window.start,
        Booking.booking_time <= window.end,
        or_(*[
            and_(Booking.status == status.value, Booking.payment_status == payment.value)
            for status, payment in REVENUE_STATUS_PAIRS
        ]),
    ]
    if movie_id is not None:
        filters.append(Booking.movie_id == movie_id)
    return filters


def bucket_keys(period: str, dialect_name: str = "postgresql") -> list:
    """Grouping key columns for a granularity, coarsest first."""
    booked = Booking.booking_time
    if period == "week":
        # PostgreSQL weeks are ISO weeks, so they pair with the ISO year;
        # SQLite %W weeks never cross a calendar year
        year_field = "isoyear" if dialect_name == "postgresql" else "year"
        return [
            extract(year_field, booked).label("bucket_year"),
            extract("week", booked).label("bucket_week"),
        ]
    keys = [
        extract("year", booked).label("bucket_year"),
        extract("month", booked).label("bucket_month"),
    ]
    if period == "day":
        keys.append(extract("day", booked).label("bucket_day"))
    return keys


def _row_label(period: str, row) -> str:
    return format_bucket_label(
        period,
        row.bucket_year,
        month=getattr(row, "bucket_month", None),
        day=getattr(row, "bucket_day", None),
        week=getattr(row, "bucket_week", None),
    )


def _empty_response(params: RevenueStatsQuery) -> RevenueStatsPaginatedResponse:
    return RevenueStatsPaginatedResponse(
        data=[],
        pagination=Pagination(
            current_page=1,
            total_pages=0,
            total_items=0,
            items_per_page=params.limit,
            has_next=False,
            has_prev=False,
        ),
        summary=RevenueStatsSummary(
            total_revenue=0,
            total_bookings=0,
            average_revenue_per_period=0,
            period_type=params.period,
            date_range=DateRange(
                start=params.start_date.isoformat() if params.start_date else "",
                end=params.end_date.isoformat() if params.end_date else "",
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Bucket rows
# ---------------------------------------------------------------------------


def _attach_entity_info(db: Session, group_by: str, rows: list, items: List[RevenueStatsItem]):
    if group_by not in ENTITY_COLUMNS or not rows:
        return
    ids = {row.entity_id for row in rows}
    if group_by == "theater":
        theaters = {t.id: t for t in db.query(Theater).filter(Theater.id.in_(ids)).all()}
        for row, item in zip(rows, items):
            t = theaters.get(row.entity_id)
            item.theater_info = TheaterInfo(
                theater_id=str(row.entity_id),
                theater_name=t.name if t else "",
                theater_location=t.location if t else "",
            )
    elif group_by == "movie":
        movies = {m.id: m for m in db.query(Movie).filter(Movie.id.in_(ids)).all()}
        for row, item in zip(rows, items):
            m = movies.get(row.entity_id)
            item.movie_info = MovieInfo(
                movie_id=str(row.entity_id),
                movie_title=m.title if m else "",
                movie_genre=(m.genre or []) if m else [],
            )


def _bucket_page(db: Session, filters: list, params: RevenueStatsQuery):
    """Returns (total bucket count, rows of the requested page)."""
    keys = bucket_keys(params.period, db.get_bind().dialect.name)
    entity = ENTITY_COLUMNS.get(params.group_by)
    group_keys = ([entity.label("entity_id")] if entity is not None else []) + keys

    revenue = _revenue().label("revenue")
    bookings_count = func.count(Booking.id).label("bookings_count")

    grouped = (
        db.query(
            *group_keys,
            revenue,
            bookings_count,
            _tickets().label("tickets_sold"),
            _capacity().label("total_capacity"),
        )
        .select_from(Booking)
        .outerjoin(Screen, Screen.id == Booking.screen_id)
        .filter(*filters)
        .group_by(*group_keys)
    )

    total_items = db.query(func.count()).select_from(grouped.subquery()).scalar() or 0

    direction = asc if params.sort_order == "asc" else desc
    if params.sort_by == "revenue":
        primary = [revenue]
    elif params.sort_by == "bookings":
        primary = [bookings_count]
    else:
        primary = []
    # Zero-padded labels sort the same as their numeric keys
    order = [direction(col) for col in primary + keys]
    if entity is not None:
        order.append(asc(group_keys[0]))

    rows = (
        grouped.order_by(*order)
        .offset((params.page - 1) * params.limit)
        .limit(params.limit)
        .all()
    )
    return total_items, rows


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def _top_performer(db: Session, filters: list, column):
    revenue = func.sum(Booking.total_amount).label("revenue")
    return (
        db.query(column.label("entity_id"), revenue)
        .filter(*filters)
        .group_by(column)
        .order_by(desc(revenue), asc(column))
        .first()
    )


def _summary(db: Session, filters: list, window: PeriodWindow, total_items: int) -> RevenueStatsSummary:
    totals = (
        db.query(
            _revenue().label("total_revenue"),
            func.count(Booking.id).label("total_bookings"),
            _tickets().label("total_tickets_sold"),
            func.count(Booking.theater_id.distinct()).label("theaters_count"),
            func.count(Booking.movie_id.distinct()).label("movies_count"),
            _capacity().label("total_capacity"),
        )
        .select_from(Booking)
        .outerjoin(Screen, Screen.id == Booking.screen_id)
        .filter(*filters)
        .one()
    )

    top_theater = None
    best = _top_performer(db, filters, Booking.theater_id)
    if best is not None:
        theater = db.get(Theater, best.entity_id)
        top_theater = TopTheater(
            theater_id=str(best.entity_id),
            theater_name=theater.name if theater else "",
            revenue=round2(best.revenue),
        )

    top_movie = None
    best = _top_performer(db, filters, Booking.movie_id)
    if best is not None:
        movie = db.get(Movie, best.entity_id)
        top_movie = TopMovie(
            movie_id=str(best.entity_id),
            movie_title=movie.title if movie else "",
            revenue=round2(best.revenue),
        )

    return RevenueStatsSummary(
        total_revenue=round2(totals.total_revenue),
        total_bookings=totals.total_bookings or 0,
        # Per bucket, not per booking
        average_revenue_per_period=ratio(totals.total_revenue, total_items),
        period_type=window.period,
        date_range=DateRange(**window.date_range),
        total_tickets_sold=int(totals.total_tickets_sold or 0),
        theaters_count=totals.theaters_count or 0,
        movies_count=totals.movies_count or 0,
        top_performing_theater=top_theater,
        top_performing_movie=top_movie,
        average_occupancy_rate=ratio(totals.total_tickets_sold, totals.total_capacity, scale=100),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def get_revenue_stats(
    db: Session,
    staff_id: UUID,
    params: RevenueStatsQuery,
    now: Optional[datetime] = None,
) -> RevenueStatsPaginatedResponse:
    """
    Paginated revenue per time bucket for the theaters a staff member manages.

    Runs three read-only passes over the same filter: a bucket count, the
    sorted page of buckets, and a summary over the whole window.
    """
    theater_ids = resolve_managed_theater_ids(db, staff_id, params.theater_id)
    if not theater_ids:
        logger.info("Staff %s manages no matching theaters; returning empty revenue stats.", staff_id)
        return _empty_response(params)

    window = plan_period_window(params.period, params.start_date, params.end_date, now=now)
    movie_id = _parse_uuid(params.movie_id) if params.movie_id is not None else None
    filters = revenue_filters(theater_ids, window, movie_id)

    logger.debug(
        "Revenue stats for staff %s: period=%s window=%s..%s page=%d limit=%d",
        staff_id, window.period, window.start, window.end, params.page, params.limit,
    )

    total_items, rows = _bucket_page(db, filters, params)
    total_pages = -(-total_items // params.limit) if total_items else 0

    data = [
        RevenueStatsItem(
            period=params.period,
            date=_row_label(params.period, row),
            revenue=round2(row.revenue),
            bookings_count=row.bookings_count,
            average_booking_value=ratio(row.revenue, row.bookings_count),
            tickets_sold=int(row.tickets_sold or 0),
            total_seats_capacity=int(row.total_capacity or 0),
            occupancy_rate=ratio(row.tickets_sold, row.total_capacity, scale=100),
        )
        for row in rows
    ]
    _attach_entity_info(db, params.group_by, rows, data)

    return RevenueStatsPaginatedResponse(
        data=data,
        pagination=Pagination(
            current_page=params.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=params.limit,
            has_next=params.page < total_pages,
            has_prev=params.page > 1,
        ),
        summary=_summary(db, filters, window, total_items),
    )
