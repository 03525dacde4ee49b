import pytest

from tredcental.models import Gear
from tredcental.utils.formatters import fmt_date, money
from tredcental.utils.validators import parse_discount, parse_int_prefix, parse_rental_days


@pytest.mark.parametrize(
    "raw,expected",
    [("3", 3), (" 4 ", 4), ("2.5", 2), ("7abc", 7), (5, 5), ("-5", 1), ("abc", 1), ("", 1), (None, 1), (0, 1)],
)
def test_parse_rental_days(raw, expected):
    assert parse_rental_days(raw) == expected


def test_parse_int_prefix_rejects_garbage():
    assert parse_int_prefix("x1") is None
    assert parse_int_prefix(True) is None
    assert parse_int_prefix(float("nan")) is None
    assert parse_int_prefix("-2") == -2


@pytest.mark.parametrize(
    "raw,expected",
    [("10", 10.0), ("12,5", 12.5), (150, 150.0), ("-5", -5.0), ("abc", 0.0), ("", 0.0), (None, 0.0), ("inf", 0.0), ("1_0", 0.0), ("nan", 0.0), ("1e1", 10.0)],
)
def test_parse_discount(raw, expected):
    assert parse_discount(raw) == expected


def test_negative_price_rejected():
    with pytest.raises(ValueError):
        Gear(99, "Broken", -1, "", "Misc")


def test_money_uses_id_grouping():
    assert money(300000) == "Rp 300.000"
    assert money(0) == "Rp 0"


def test_fmt_date():
    from datetime import date

    assert fmt_date(date(2024, 5, 1)) == "01/05/2024"
    assert fmt_date(None) == "-"
