"""
Pytest fixtures for planner tests.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Tuple

import pytest

# Keep the module-level manager in period_planner.tools away from the working directory
os.environ.setdefault(
    "PLANNER_STATE_FILE", str(Path(tempfile.mkdtemp()) / "planner.yaml")
)

from period_planner.legend import DEFAULT_LEGEND  # noqa: E402
from period_planner.models import (  # noqa: E402
    BasePeriod,
    ColoredRange,
    PersonalInfo,
    PlannerState,
)
from period_planner.planner import PlannerManager  # noqa: E402


class InMemoryPlannerStore:
    """In-memory planner store for testing without file I/O.

    Implements the same interface as PlannerStore but keeps the state in
    memory. Each load hands out a deep copy, like reading the file again.
    """

    def __init__(self, state: PlannerState | None = None):
        self._state = state or PlannerState()
        self.save_count = 0

    def load(self) -> PlannerState:
        return self._state.model_copy(deep=True)

    def save(self, state: PlannerState) -> None:
        self._state = state.model_copy(deep=True)
        self.save_count += 1

    def add_range(self, start: date, end: date, type: str, special: bool = False) -> None:
        """Add a colored range directly, bypassing the click engine."""
        self._state.ranges.append(
            ColoredRange(start=start, end=end, type=type, special=special)
        )


@pytest.fixture
def january_state() -> PlannerState:
    """One base period covering January 2024.

    January 2024 starts on a Monday; 1.01 is a holiday, so the month has
    22 working days.
    """
    return PlannerState(
        periods=[BasePeriod(start=date(2024, 1, 1), end=date(2024, 1, 31))],
        personal_info=PersonalInfo(first_name="Jan", last_name="Kowalski"),
    )


@pytest.fixture
def in_memory_store(january_state: PlannerState) -> InMemoryPlannerStore:
    """Fixture providing an in-memory store seeded with the January period."""
    return InMemoryPlannerStore(january_state)


@pytest.fixture
def memory_manager(in_memory_store: InMemoryPlannerStore) -> PlannerManager:
    """PlannerManager backed by the in-memory store."""
    return PlannerManager(store=in_memory_store, categories=DEFAULT_LEGEND)


@pytest.fixture
def temp_planner(tmp_path: Path) -> Tuple[Path, PlannerManager]:
    """Fixture providing a temporary planner YAML file and PlannerManager instance.

    Args:
        tmp_path: pytest's built-in tmp_path fixture

    Returns:
        Tuple[Path, PlannerManager]: Path of the planner file and a manager
        exporting into tmp_path
    """
    planner_path = tmp_path / "test_planner.yaml"
    manager = PlannerManager(str(planner_path), export_dir=tmp_path)
    return planner_path, manager
