from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_admin_user
from app.models.user import User
from app.schemas.theater_analytics import TheaterAnalyticsRow
from app.services.theater_analytics import get_all_theaters_revenue_and_customers

router = APIRouter(prefix="/admin/theater-analytics", tags=["Admin - Theater Analytics"])


@router.get("/", response_model=List[TheaterAnalyticsRow])
def all_theaters_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return get_all_theaters_revenue_and_customers(db)
