from app.schemas.common import Pagination, ErrorResponse
from app.schemas.revenue import (
    RevenueStatsQuery, RevenueStatsItem, RevenueStatsSummary,
    RevenueStatsPaginatedResponse, TheaterInfo, MovieInfo,
    DateRange, TopTheater, TopMovie,
)
from app.schemas.theater_analytics import (
    TheaterRevenueAndCustomers, MyTheaterAnalytics, TheaterAnalyticsRow,
)
