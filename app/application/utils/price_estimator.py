from __future__ import annotations

import math
import re
from typing import Iterable

from app.application.utils.budget_math import round_half_up

CATEGORY_MULTIPLIERS = {
    "wedding_venue": 1.0,
    "photographer": 0.1,
    "catering": 0.5,
    "florist": 0.2,
    "dj": 0.3,
}

EVENT_TYPE_ADJUSTMENTS = {
    "wedding": 1.2,
    "birthday": 0.8,
    "corporate": 1.0,
    "other": 1.0,
}

DEFAULT_PRICE_LEVEL = 2
BASE_GUEST_COUNT = 50

_PRICE_RE = re.compile(r"\$(\d+[\d,]*)")


def estimate_price(
    price_level: int | None,
    category: str,
    event_type: str,
    guest_count: int,
) -> float:
    """
    Rough dollar estimate for a vendor from its places price level (0-4).

    Costs grow linearly with guests beyond the first 50.
    """
    level = DEFAULT_PRICE_LEVEL if price_level is None else price_level
    base = (level + 1) * 50
    category_mult = CATEGORY_MULTIPLIERS.get(category, 1.0)
    event_mult = EVENT_TYPE_ADJUSTMENTS.get(event_type, 1.0)
    guest_factor = 1 + (guest_count - BASE_GUEST_COUNT) / 100 if guest_count > BASE_GUEST_COUNT else 1
    return round_half_up(base * category_mult * event_mult * guest_factor)


def extract_prices_from_reviews(reviews: Iterable[str]) -> list[int]:
    prices: list[int] = []
    for review in reviews:
        for match in _PRICE_RE.finditer(review or ""):
            digits = match.group(1).replace(",", "")
            if digits.isdigit():
                prices.append(int(digits))
    return prices


def score_price_estimate(estimates: list[float]) -> tuple[float, float]:
    """Mean estimate and a 0-1 confidence that drops as the spread grows."""
    if not estimates:
        return 0.0, 0.0
    avg = sum(estimates) / len(estimates)
    variance = sum((value - avg) ** 2 for value in estimates) / len(estimates)
    stdev = math.sqrt(variance)
    confidence = 1 / (1 + stdev / (avg or 1))
    return round_half_up(avg), round(confidence, 2)
