from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

# Trailing window length per granularity when no explicit range is given.
# Months are approximated as 30-day blocks.
DEFAULT_WINDOW_DAYS = {
    "day": 30,
    "week": 12 * 7,
    "month": 12 * 30,
}

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class PeriodWindow:
    period: str
    start: datetime
    end: datetime

    @property
    def date_range(self) -> dict:
        return {
            "start": self.start.date().isoformat(),
            "end": self.end.date().isoformat(),
        }


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def plan_period_window(
    period: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    now: Optional[datetime] = None,
) -> PeriodWindow:
    """
    Resolve the booking-time window for a statistics request.

    - Both dates given: [start_date 00:00:00.000, end_date 23:59:59.999].
    - Otherwise a trailing window ending today at 23:59:59.999 and starting
      at midnight 30 days (day), 84 days (week) or 360 days (month) ago.

    An inverted explicit range is returned as-is; it simply matches nothing.
    """
    if start_date is not None and end_date is not None:
        return PeriodWindow(period, start_of_day(start_date), end_of_day(end_date))

    # Local time, booking_time is stored as a timezone-naive local value
    now = now or datetime.now()
    days = DEFAULT_WINDOW_DAYS.get(period, DEFAULT_WINDOW_DAYS["day"])
    start = start_of_day((now - timedelta(days=days)).date())
    return PeriodWindow(period, start, end_of_day(now.date()))


def format_bucket_label(period: str, year: int, month: int = None, day: int = None, week: int = None) -> str:
    """Human-readable bucket label: YYYY-MM-DD, YYYY-W<week> or YYYY-MM."""
    if period == "week":
        return f"{int(year):04d}-W{int(week):02d}"
    if period == "month":
        return f"{int(year):04d}-{int(month):02d}"
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"
