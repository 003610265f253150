"""Tests for unit handling helpers."""

from datetime import date, datetime

import pytest

from timestream.errors import InvalidArgument, MissingRequiredValue
from timestream.util import advance, normalize_unit


def test_advance_datetime():
    t0 = datetime(2025, 3, 1, 12, 0)
    assert advance(t0, -90, "minutes") == datetime(2025, 3, 1, 10, 30)
    assert advance(t0, 2, "weeks") == datetime(2025, 3, 15, 12, 0)
    assert advance(t0, 0, "seconds") == t0


def test_advance_date_by_calendar_units():
    assert advance(date(2025, 1, 31), 1, "months") == date(2025, 2, 28)
    assert advance(date(2024, 2, 29), 1, "years") == date(2025, 2, 28)
    assert advance(date(2025, 3, 1), -1, "days") == date(2025, 2, 28)


def test_advance_keeps_instant_kind():
    result = advance(date(2025, 1, 1), 3, "days")
    assert type(result) is date


def test_normalize_unit():
    assert normalize_unit("HOURS", datetime(2025, 1, 1)) == "hours"
    assert normalize_unit("days", date(2025, 1, 1)) == "days"


def test_normalize_unit_errors():
    with pytest.raises(MissingRequiredValue):
        normalize_unit(None, datetime(2025, 1, 1))
    with pytest.raises(InvalidArgument, match="Invalid unit"):
        normalize_unit("second", datetime(2025, 1, 1))
    with pytest.raises(InvalidArgument, match="cannot step a date"):
        normalize_unit("seconds", date(2025, 1, 1))
    with pytest.raises(InvalidArgument, match="must be a string"):
        normalize_unit(60, datetime(2025, 1, 1))  # type: ignore[arg-type]
