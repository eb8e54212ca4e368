from datetime import date

import pytest
from pydantic import ValidationError

from app import schemas
from app.schemas.revenue import RevenueStatsQuery, RevenueStatsItem, RevenueStatsSummary, DateRange, TheaterInfo


def test_schemas_package_imports():
    assert schemas.RevenueStatsPaginatedResponse is not None
    assert schemas.MyTheaterAnalytics is not None


def test_query_defaults():
    query = RevenueStatsQuery()

    assert query.period == "day"
    assert query.page == 1
    assert query.limit == 10
    assert query.sort_by == "date"
    assert query.sort_order == "desc"
    assert query.group_by == "date"


def test_query_accepts_transport_strings():
    query = RevenueStatsQuery(
        period="week", start_date="2024-01-01", end_date="2024-01-31",
        page="3", limit="25", sort_by="revenue", sort_order="asc", group_by="movie",
    )

    assert query.period == "week"
    assert query.start_date == date(2024, 1, 1)
    assert query.page == 3
    assert query.limit == 25
    assert query.sort_by == "revenue"
    assert query.sort_order == "asc"
    assert query.group_by == "movie"


@pytest.mark.parametrize("raw", ["abc", "", "0", "-4", None, "1.5"])
def test_malformed_page_and_limit_fall_back(raw):
    query = RevenueStatsQuery(page=raw, limit=raw)

    assert query.page == 1
    assert query.limit == 10


@pytest.mark.parametrize(
    "field, raw, expected",
    [
        ("period", "year", "day"),
        ("period", None, "day"),
        ("sort_by", "title", "date"),
        ("sort_order", "ASC", "desc"),
        ("sort_order", "sideways", "desc"),
        ("group_by", "screen", "date"),
    ],
)
def test_out_of_set_values_fall_back(field, raw, expected):
    query = RevenueStatsQuery(**{field: raw})

    assert getattr(query, field) == expected


def test_empty_ids_become_none():
    query = RevenueStatsQuery(theater_id="", movie_id="")

    assert query.theater_id is None
    assert query.movie_id is None


def test_malformed_date_is_rejected():
    with pytest.raises(ValidationError):
        RevenueStatsQuery(start_date="2024-02-30")


def test_item_omits_entity_info_it_does_not_carry():
    item = RevenueStatsItem(
        period="day", date="2024-01-01", revenue=90, bookings_count=1, average_booking_value=90,
        theater_info=TheaterInfo(theater_id="t1", theater_name="Galaxy", theater_location="Q1"),
    )

    dumped = item.model_dump()
    assert dumped["theater_info"]["theater_name"] == "Galaxy"
    assert "movie_info" not in dumped


def test_summary_keeps_missing_top_performers_as_null():
    summary = RevenueStatsSummary(
        total_revenue=0, total_bookings=0, average_revenue_per_period=0,
        period_type="day", date_range=DateRange(start="", end=""),
    )

    dumped = summary.model_dump(mode="json")
    assert dumped["top_performing_theater"] is None
    assert dumped["top_performing_movie"] is None
