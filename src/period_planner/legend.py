"""
Legend categories available for painting ranges.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import TypeAdapter

from .models import LegendCategory

logger = logging.getLogger(__name__)

DEFAULT_LEGEND: list[LegendCategory] = [
    LegendCategory(label="Urlop", color="red-500"),
    LegendCategory(label="Staże", color="blue-500", ask_for_label=True),
    LegendCategory(label="Kursy", color="cyan-400", ask_for_label=True),
    LegendCategory(label="Samokształcenie", color="emerald-400"),
    LegendCategory(label="L4", color="amber-700"),
    LegendCategory(label="Opieka nad dzieckiem", color="purple-500"),
    LegendCategory(label="Kwarantanna", color="yellow-500"),
    LegendCategory(label="Urlop macierzyński", color="pink-400"),
    LegendCategory(label="Urlop wychowawczy", color="green-600"),
    LegendCategory(label="Dyżur", color="orange-500", special=True),
]

_legend_adapter = TypeAdapter(list[LegendCategory])


def load_legend(path: Optional[Path | str] = None) -> list[LegendCategory]:
    """Load legend categories from a YAML list, or the built-in legend without a path."""
    if path is None:
        return list(DEFAULT_LEGEND)

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    categories = _legend_adapter.validate_python(data or [])
    labels = [c.label for c in categories]
    if len(set(labels)) != len(labels):
        raise ValueError("Legend labels must be unique")

    logger.info("Loaded %d legend categories from %s", len(categories), path)
    return categories


def find_category(
    label: Optional[str], categories: Sequence[LegendCategory]
) -> Optional[LegendCategory]:
    """Category with the given label, or None."""
    if label is None:
        return None
    for category in categories:
        if category.label == label:
            return category
    return None
