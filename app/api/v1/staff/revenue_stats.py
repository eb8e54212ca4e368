from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_staff_user
from app.models.user import User
from app.schemas.revenue import RevenueStatsQuery, RevenueStatsPaginatedResponse
from app.services.revenue_stats import get_revenue_stats

router = APIRouter(prefix="/staff", tags=["Staff - Revenue"])


@router.get(
    "/revenue-stats",
    response_model=RevenueStatsPaginatedResponse,
)
def revenue_stats(
    # --- Time buckets ---
    period: Optional[str] = Query(None, description="day | week | month (default: day)"),
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),

    # --- Pagination & sorting (raw strings, bad values fall back to defaults) ---
    page: Optional[str] = Query(None, description="Page number (default: 1)"),
    limit: Optional[str] = Query(None, description="Buckets per page (default: 10)"),
    sort_by: Optional[str] = Query(None, description="date | revenue | bookings (default: date)"),
    sort_order: Optional[str] = Query(None, description="asc | desc (default: desc)"),

    # --- Narrowing & grouping ---
    theater_id: Optional[str] = Query(None, description="Only this one of your theaters"),
    movie_id: Optional[str] = Query(None, description="Only bookings for this movie"),
    group_by: Optional[str] = Query(None, description="date | theater | movie (default: date)"),

    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    """
    Revenue statistics for the theaters managed by the current staff member.

    Only bookings whose (status, payment_status) is (confirmed, completed),
    (completed, completed) or (used, completed) are counted.

    **Date window**: both `start_date` and `end_date` for a custom inclusive
    range, otherwise the last 30 days (`day`), 12 weeks (`week`) or 12 × 30
    days (`month`) up to the end of today.

    **Response includes:**
    - `data`: one row per time bucket (per theater/movie with `group_by`)
    - `pagination`: computed over buckets, not bookings
    - `summary`: totals over the whole window, independent of the page
    """
    params = RevenueStatsQuery(
        period=period,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        theater_id=theater_id,
        movie_id=movie_id,
        group_by=group_by,
    )
    return get_revenue_stats(db, current_user.id, params)
