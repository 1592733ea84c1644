from __future__ import annotations

import re
from typing import Iterable

from app.domain.entities.event_profile import EventProfile
from app.domain.entities.message import ChatMessage

EVENT_TYPE_KEYWORDS = (
    "wedding",
    "birthday",
    "conference",
    "party",
    "corporate",
    "retreat",
    "baby shower",
    "graduation",
)

STYLE_KEYWORDS = (
    "rustic",
    "modern",
    "formal",
    "casual",
    "vintage",
    "bohemian",
    "elegant",
)

MONTHS = (
    "january|february|march|april|may|june|july|august|september|october|november|december"
)

_MONEY_RE = re.compile(r"([$€£])?\s*(\d{1,3}(?:,\d{3})+(?:\.\d{2})?|\d+(?:\.\d{2})?)")
_LOCATION_RE = re.compile(r"\b(?:in|at)\s+([A-Za-z\s,]+)", re.IGNORECASE)
_ISO_DATE_RE = re.compile(r"\b\d{4}-\d{2}-\d{2}\b")
_MONTH_DAY_RE = re.compile(rf"\b({MONTHS})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b", re.IGNORECASE)


def extract_event_type(text: str) -> str | None:
    lowered = text.lower()
    for keyword in EVENT_TYPE_KEYWORDS:
        if keyword in lowered:
            return keyword
    return None


def extract_budget(text: str, require_symbol: bool = False) -> tuple[float, str] | None:
    """First number in the text, optionally prefixed by $, € or £. Assumes $."""
    for match in _MONEY_RE.finditer(text):
        symbol, amount_str = match.groups()
        if symbol or not require_symbol:
            break
    else:
        return None
    try:
        amount = float(amount_str.replace(",", ""))
    except ValueError:
        return None
    return amount, symbol or "$"


def extract_location(text: str) -> str | None:
    match = _LOCATION_RE.search(text)
    if not match:
        return None
    location = match.group(1).strip(" ,")
    return location or None


def extract_date(text: str) -> str | None:
    iso = _ISO_DATE_RE.search(text)
    if iso:
        return iso.group(0)
    match = _MONTH_DAY_RE.search(text)
    if match:
        return f"{match.group(1).capitalize()} {match.group(2)}"
    return None


def extract_styles(text: str) -> tuple[str, ...]:
    lowered = text.lower()
    return tuple(style for style in STYLE_KEYWORDS if style in lowered)


def merge_profiles(base: EventProfile, update: EventProfile) -> EventProfile:
    """Overlay the non-empty fields of `update` onto `base`."""
    has_budget = update.budget_amount is not None
    return EventProfile(
        event_type=update.event_type or base.event_type,
        budget_amount=update.budget_amount if has_budget else base.budget_amount,
        currency=update.currency if has_budget else base.currency,
        location=update.location or base.location,
        date=update.date or base.date,
        styles=update.styles or base.styles,
    )


def parse_event(messages: Iterable[ChatMessage], require_currency_symbol: bool = False) -> EventProfile:
    """
    Build an event profile from a conversation; later mentions override earlier ones.

    With `require_currency_symbol`, bare numbers (guest counts, days of the month)
    are not taken as the budget.
    """
    event_type = None
    budget = None
    location = None
    event_date = None
    styles: tuple[str, ...] = ()

    for message in messages:
        content = message.content or ""
        event_type = extract_event_type(content) or event_type
        budget = extract_budget(content, require_symbol=require_currency_symbol) or budget
        location = extract_location(content) or location
        event_date = extract_date(content) or event_date
        styles = extract_styles(content) or styles

    return EventProfile(
        event_type=event_type,
        budget_amount=budget[0] if budget else None,
        currency=budget[1] if budget else None,
        location=location,
        date=event_date,
        styles=styles,
    )
