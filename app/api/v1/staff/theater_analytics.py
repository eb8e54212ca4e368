from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.deps import get_current_staff_user
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.theater_analytics import MyTheaterAnalytics
from app.services.theater_analytics import get_my_theater_analytics

router = APIRouter(prefix="/staff", tags=["Staff - Theater Analytics"])


@router.get(
    "/theater-analytics",
    response_model=MyTheaterAnalytics,
    responses={404: {"model": ErrorResponse}},
)
def my_theater_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_staff_user),
):
    """Revenue, bookings and distinct customers of the theater you manage."""
    return get_my_theater_analytics(db, current_user.id)
