from datetime import date, datetime

import pytest

from inventory_engine.utils.time import days_between, fixed_clock, parse_iso_date


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-02-10", date(2024, 2, 10)),
        (" 2024-02-10 ", date(2024, 2, 10)),
        ("2024-02-10T18:30:00", date(2024, 2, 10)),
        (date(2024, 2, 10), date(2024, 2, 10)),
        (datetime(2024, 2, 10, 23, 59), date(2024, 2, 10)),
    ],
)
def test_parse_iso_date_accepts(value, expected):
    assert parse_iso_date(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "10/02/2024", "2024-02-30", "2024-02-10garbage", "2024-02-10xx:yy", 20240210],
)
def test_parse_iso_date_rejects(value):
    assert parse_iso_date(value) is None


def test_days_between_signed():
    assert days_between(date(2024, 2, 1), date(2024, 2, 15)) == 14
    assert days_between(date(2024, 2, 15), date(2024, 2, 1)) == -14


def test_fixed_clock():
    clock = fixed_clock(date(2024, 2, 1))
    assert clock() == date(2024, 2, 1)
