from typing import Optional, List, Literal
from datetime import date

from pydantic import BaseModel, field_validator, model_serializer

from app.core.config import settings
from app.schemas.common import Pagination


PERIODS = ("day", "week", "month")
SORT_FIELDS = ("date", "revenue", "bookings")
SORT_ORDERS = ("asc", "desc")
GROUPINGS = ("date", "theater", "movie")


def _positive_int_or(value, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


# Revenue stats: query (GET /staff/revenue-stats)
class RevenueStatsQuery(BaseModel):
    """
    Resolved query for the staff revenue statistics.

    Every field arrives as an optional string. Unknown enum values and
    non-numeric or non-positive page/limit fall back to their defaults
    instead of raising.
    """

    period: Literal["day", "week", "month"] = "day"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = 1
    limit: int = settings.STATS_DEFAULT_LIMIT
    sort_by: Literal["date", "revenue", "bookings"] = "date"
    sort_order: Literal["asc", "desc"] = "desc"
    # Kept raw: an unparseable theater_id narrows to nothing, an unparseable movie_id is ignored
    theater_id: Optional[str] = None
    movie_id: Optional[str] = None
    group_by: Literal["date", "theater", "movie"] = "date"

    @field_validator("period", mode="before")
    @classmethod
    def default_period(cls, v):
        return v if v in PERIODS else "day"

    @field_validator("sort_by", mode="before")
    @classmethod
    def default_sort_by(cls, v):
        return v if v in SORT_FIELDS else "date"

    @field_validator("sort_order", mode="before")
    @classmethod
    def default_sort_order(cls, v):
        return "asc" if v == "asc" else "desc"

    @field_validator("group_by", mode="before")
    @classmethod
    def default_group_by(cls, v):
        return v if v in GROUPINGS else "date"

    @field_validator("page", mode="before")
    @classmethod
    def parse_page(cls, v):
        return _positive_int_or(v, 1)

    @field_validator("limit", mode="before")
    @classmethod
    def parse_limit(cls, v):
        return _positive_int_or(v, settings.STATS_DEFAULT_LIMIT)

    @field_validator("theater_id", "movie_id", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v


# Nested info attached to rows when grouping by theater or movie
class TheaterInfo(BaseModel):
    theater_id: str
    theater_name: str
    theater_location: str


class MovieInfo(BaseModel):
    movie_id: str
    movie_title: str
    movie_genre: List[str] = []


# One time bucket (optionally per theater/movie)
class RevenueStatsItem(BaseModel):
    period: str          # "day" | "week" | "month"
    date: str            # "2024-01-01" | "2024-W05" | "2024-01"
    revenue: float
    bookings_count: int
    average_booking_value: float
    tickets_sold: int = 0
    total_seats_capacity: int = 0
    occupancy_rate: float = 0
    theater_info: Optional[TheaterInfo] = None
    movie_info: Optional[MovieInfo] = None

    @model_serializer(mode="wrap")
    def drop_missing_info(self, handler):
        # Entity info only appears on rows grouped by theater or movie
        data = handler(self)
        for key in ("theater_info", "movie_info"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class DateRange(BaseModel):
    start: str
    end: str


class TopTheater(BaseModel):
    theater_id: str
    theater_name: str
    revenue: float


class TopMovie(BaseModel):
    movie_id: str
    movie_title: str
    revenue: float


# Totals over the whole window, never affected by pagination
class RevenueStatsSummary(BaseModel):
    total_revenue: float
    total_bookings: int
    average_revenue_per_period: float
    period_type: str
    date_range: DateRange
    total_tickets_sold: int = 0
    theaters_count: int = 0
    movies_count: int = 0
    top_performing_theater: Optional[TopTheater] = None
    top_performing_movie: Optional[TopMovie] = None
    average_occupancy_rate: float = 0


class RevenueStatsPaginatedResponse(BaseModel):
    data: List[RevenueStatsItem]
    pagination: Pagination
    summary: RevenueStatsSummary
