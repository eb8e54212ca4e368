from fastapi import APIRouter

# Staff
from app.api.v1.staff.revenue_stats import router as staff_revenue_router
from app.api.v1.staff.theater_analytics import router as staff_analytics_router

# Admin
from app.api.v1.admin.theater_analytics import router as admin_analytics_router

api_router = APIRouter()

# --- Staff ---
api_router.include_router(staff_revenue_router)
api_router.include_router(staff_analytics_router)

# --- Admin ---
api_router.include_router(admin_analytics_router)
