"""
Test cases for the planner data model and legend loading.
"""

from datetime import date

import pytest
import yaml
from pydantic import ValidationError

from period_planner.legend import DEFAULT_LEGEND, find_category, load_legend
from period_planner.models import (
    BasePeriod,
    ColoredRange,
    LegendCategory,
    PersonalInfo,
    PlannerState,
)
from period_planner.planner import PlannerStore


class TestModels:

    def test_base_period_parses_strings(self):
        period = BasePeriod(start="01.01.2024", end="2024-12-31")
        assert period.start == date(2024, 1, 1)
        assert period.end == date(2024, 12, 31)
        assert period.is_defined
        assert period.contains(date(2024, 6, 1))

    def test_base_period_empty_bounds(self):
        period = BasePeriod(start="", end="31.12.2024")
        assert period.start is None
        assert not period.is_defined
        assert not period.contains(date(2024, 6, 1))

    def test_base_period_invalid_date(self):
        with pytest.raises(ValidationError):
            BasePeriod(start="31.02.2024")

    def test_base_period_order(self):
        with pytest.raises(ValidationError):
            BasePeriod(start="2024-02-01", end="2024-01-01")
        assert BasePeriod(start="2024-02-01", end="2024-02-01").is_defined
        assert not BasePeriod(start="2024-02-01").is_defined

    def test_inverted_period_in_yaml_rejected(self, tmp_path):
        path = tmp_path / "planner.yaml"
        path.write_text(
            yaml.dump({"periods": [{"start": "2024-12-31", "end": "2024-01-01"}]}),
            encoding="utf-8",
        )
        with pytest.raises(ValidationError):
            PlannerStore(path).load()

    def test_colored_range_order(self):
        with pytest.raises(ValidationError):
            ColoredRange(start="2024-01-10", end="2024-01-05", type="Urlop")

    def test_colored_range_requires_dates(self):
        with pytest.raises(ValidationError):
            ColoredRange(start="", end="2024-01-05", type="Urlop")

    def test_colored_range_str(self):
        r = ColoredRange(start="2024-01-08", end="2024-01-08", type="Kursy", label="RKO")
        assert str(r) == "(RKO) 08.01.2024"

    def test_legend_category_label(self):
        with pytest.raises(ValidationError):
            LegendCategory(label="  ", color="red-500")

    def test_personal_info_full_name(self):
        assert PersonalInfo(first_name="Jan", last_name="Kowalski").full_name == "Jan Kowalski"
        assert PersonalInfo().full_name == ""

    def test_state_defaults(self):
        state = PlannerState()
        assert len(state.periods) == 1
        assert not state.periods[0].is_defined
        assert state.defined_periods == []

    def test_state_round_trip(self):
        state = PlannerState(
            periods=[BasePeriod(start=date(2024, 1, 1), end=date(2024, 1, 31))],
            ranges=[ColoredRange(start=date(2024, 1, 8), end=date(2024, 1, 12), type="Urlop")],
        )
        restored = PlannerState.model_validate(state.model_dump(mode="json"))
        assert restored == state


class TestLegend:

    def test_default_legend(self):
        labels = [c.label for c in DEFAULT_LEGEND]
        assert "Urlop" in labels
        assert find_category("Staże", DEFAULT_LEGEND).ask_for_label
        assert find_category("Dyżur", DEFAULT_LEGEND).special
        assert find_category("Nieznany", DEFAULT_LEGEND) is None
        assert find_category(None, DEFAULT_LEGEND) is None

    def test_load_default_without_path(self):
        assert load_legend() == DEFAULT_LEGEND

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "legend.yaml"
        path.write_text(
            yaml.dump([
                {"label": "Urlop", "color": "red-500"},
                {"label": "Dyżur", "color": "orange-500", "special": True},
            ]),
            encoding="utf-8",
        )
        categories = load_legend(path)
        assert [c.label for c in categories] == ["Urlop", "Dyżur"]
        assert categories[1].special

    def test_duplicate_labels_rejected(self, tmp_path):
        path = tmp_path / "legend.yaml"
        path.write_text(
            yaml.dump([
                {"label": "Urlop", "color": "red-500"},
                {"label": "Urlop", "color": "blue-500"},
            ]),
            encoding="utf-8",
        )
        with pytest.raises(ValueError):
            load_legend(path)
