"""
Test cases for period statistics.
"""

from datetime import date

import pytest

from period_planner.models import BasePeriod, ColoredRange
from period_planner.summary import (
    OUTSIDE_PERIODS,
    describe_duties,
    duty_overview,
    format_summary_text,
    summarize_ranges,
    total_working_days,
    working_days_by_type,
)


@pytest.fixture
def january_ranges():
    return [
        ColoredRange(start=date(2024, 1, 15), end=date(2024, 1, 16), type="L4"),
        ColoredRange(start=date(2024, 1, 8), end=date(2024, 1, 12), type="Urlop"),
        ColoredRange(start=date(2024, 1, 20), end=date(2024, 1, 20), type="Dyżur", special=True),
        ColoredRange(start=date(2024, 1, 2), end=date(2024, 1, 2), type="L4"),
        ColoredRange(start=date(2024, 3, 4), end=date(2024, 3, 8), type="Urlop"),
    ]


class TestSummarizeRanges:

    def test_totals(self, january_ranges):
        result = summarize_ranges(january_ranges, "2024-01-01", "2024-01-31")

        assert result.total_working_days == 22
        assert result.colored_range_days == 8
        assert result.basic_period_days == 14
        assert result.working_days_by_type == {"L4": 3, "Urlop": 5}

    def test_grouping_order(self, january_ranges):
        result = summarize_ranges(january_ranges, "2024-01-01", "2024-01-31")

        assert list(result.grouped) == ["L4", "Urlop", "Dyżur"]
        assert [r.start for r in result.grouped["L4"]] == [date(2024, 1, 2), date(2024, 1, 15)]
        assert len(result.grouped["Urlop"]) == 1

    def test_consistency(self, january_ranges):
        for start, end in [("2024-01-01", "2024-01-31"), ("2024-01-10", "2024-03-31")]:
            result = summarize_ranges(january_ranges, start, end)
            assert result.basic_period_days + result.colored_range_days == result.total_working_days

    def test_invalid_period(self, january_ranges):
        result = summarize_ranges(january_ranges, "bad", "2024-01-31")
        assert result.grouped == {}
        assert result.total_working_days == 0

    def test_to_dict(self, january_ranges):
        data = summarize_ranges(january_ranges, "2024-01-01", "2024-01-31").to_dict()
        assert data["basic_period_days"] == 14
        assert data["grouped"]["Urlop"][0]["start"] == "2024-01-08"


class TestTotals:

    def test_working_days_by_type_skips_special(self, january_ranges):
        by_type, total = working_days_by_type(january_ranges)
        assert by_type == {"L4": 3, "Urlop": 10}
        assert total == 13

    def test_total_working_days_ignores_undefined(self):
        periods = [
            BasePeriod(start=date(2024, 1, 1), end=date(2024, 1, 31)),
            BasePeriod(),
            BasePeriod(start=date(2024, 2, 1), end=date(2024, 2, 29)),
        ]
        assert total_working_days(periods) == 43


class TestSummaryText:

    def test_format(self, january_ranges):
        result = summarize_ranges(january_ranges, "2024-01-01", "2024-01-31")
        text = format_summary_text(
            result.grouped, result.total_working_days, result.colored_range_days
        )

        assert text.splitlines() == [
            "Okres podstawowy ilość dni: 22 - 8 = 14",
            "L4: 02.01.2024, 15.01.2024 - 16.01.2024 = 3 dni roboczych",
            "Urlop: 08.01.2024 - 12.01.2024 = 5 dni roboczych",
        ]

    def test_labels_in_text(self):
        grouped = {
            "Kursy": [
                ColoredRange(start=date(2024, 1, 8), end=date(2024, 1, 9), type="Kursy", label="RKO")
            ]
        }
        text = format_summary_text(grouped, 22, 2)
        assert "Kursy: (RKO) 08.01.2024 - 09.01.2024 = 2 dni roboczych" in text


class TestDutyOverview:

    def test_duties_labelled_with_period(self, january_ranges):
        ranges = january_ranges + [
            ColoredRange(start=date(2023, 12, 30), end=date(2023, 12, 30), type="Dyżur", special=True)
        ]
        periods = [BasePeriod(start=date(2024, 1, 1), end=date(2024, 1, 31))]

        entries = duty_overview(ranges, periods)

        assert [(e.day, e.period) for e in entries] == [
            (date(2023, 12, 30), OUTSIDE_PERIODS),
            (date(2024, 1, 20), "Rok 1"),
        ]
        assert describe_duties(entries) == [
            "30.12.2023 Dyżur (Poza zakresem)",
            "20.01.2024 Dyżur (Rok 1)",
        ]
        assert entries[1].to_dict() == {"date": "2024-01-20", "type": "Dyżur", "period": "Rok 1"}
