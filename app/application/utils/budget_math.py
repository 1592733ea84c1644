from __future__ import annotations

import math
from typing import Iterable

from app.domain.entities.budget import VendorSelection


def round_half_up(value: float) -> float:
    """Round to whole currency units, halves towards +infinity (2.5 -> 3, -2.5 -> -2)."""
    return float(math.floor(value + 0.5))


def total_spent(selections: Iterable[VendorSelection]) -> float:
    return float(sum(s.price or 0 for s in selections))


def spent_by_category(selections: Iterable[VendorSelection]) -> dict[str, float]:
    """Per-category spend in order of first appearance; unpriced selections count as 0."""
    spent: dict[str, float] = {}
    for s in selections:
        spent[s.category] = spent.get(s.category, 0.0) + (s.price or 0)
    return spent
