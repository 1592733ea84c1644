from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EventProfile:
    event_type: str | None = None  # e.g. "wedding", "birthday"
    budget_amount: float | None = None
    currency: str | None = None  # "$", "€", "£"
    location: str | None = None
    date: str | None = None  # raw text, ISO "2025-06-14" or "June 14"
    styles: tuple[str, ...] = ()

    @staticmethod
    def from_payload(payload: dict | None) -> "EventProfile":
        data = payload or {}
        amount = data.get("budget_amount")
        return EventProfile(
            event_type=(data.get("event_type") or None),
            budget_amount=float(amount) if amount is not None else None,
            currency=data.get("currency") or None,
            location=data.get("location") or None,
            date=data.get("date") or None,
            styles=tuple(s.strip() for s in (data.get("styles") or []) if s and s.strip()),
        )

    def to_payload(self) -> dict:
        return {
            "event_type": self.event_type,
            "budget_amount": self.budget_amount,
            "currency": self.currency,
            "location": self.location,
            "date": self.date,
            "styles": list(self.styles),
        }
