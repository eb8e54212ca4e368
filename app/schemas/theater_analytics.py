from typing import Optional
from pydantic import BaseModel


class TheaterRevenueAndCustomers(BaseModel):
    theater_id: str
    total_revenue: float
    total_bookings: int
    total_customers: int


class TheaterInfo(BaseModel):
    id: str
    name: str
    location: str
    city: str
    address: Optional[str] = None
    status: Optional[str] = None


class TheaterTotals(BaseModel):
    total_revenue: float
    total_bookings: int
    total_customers: int


# GET /staff/theater-analytics
class MyTheaterAnalytics(BaseModel):
    theater_info: TheaterInfo
    analytics: TheaterTotals


# GET /admin/theater-analytics (one row per theater)
class TheaterAnalyticsRow(BaseModel):
    theater_id: str
    theater_name: str
    theater_location: str
    theater_city: str
    manager_id: Optional[str] = None
    total_revenue: float
    total_bookings: int
    total_customers: int
