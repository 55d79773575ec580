"""金额与日期工具测试"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from utils.date_utils import parse_date, get_due_date, days_between
from utils.money import to_decimal, round2, to_cents, from_cents


class TestMoney:

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value, expected", [
        ("2.345", "2.35"), ("2.344", "2.34"), ("-2.345", "-2.35"), (1, "1.00"),
    ])
    def test_round_half_up(self, value, expected):
        assert round2(value) == Decimal(expected)

    @pytest.mark.parametrize("value", [True, "abc", float("nan"), float("inf"), None])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_cents(self):
        assert to_cents("12.345") == 1235
        assert from_cents(1235) == Decimal("12.35")
        assert from_cents(-50) == Decimal("-0.50")


class TestDates:

    def test_parse(self):
        assert parse_date("2024-03-05") == date(2024, 3, 5)
        assert parse_date(datetime(2024, 3, 5, 23, 59)) == date(2024, 3, 5)
        assert parse_date(date(2024, 3, 5)) == date(2024, 3, 5)

    def test_parse_rejects_other_types(self):
        with pytest.raises(TypeError):
            parse_date(20240305)

    def test_due_date(self):
        assert get_due_date(date(2024, 1, 1), 1) == date(2024, 1, 9)
        assert get_due_date(date(2024, 2, 25), 1, period_days=7) == date(2024, 3, 3)

    def test_days_between(self):
        assert days_between(date(2024, 1, 10), date(2024, 1, 1)) == -9
