from __future__ import annotations

from app.domain.entities.budget import VendorSelection
from app.domain.entities.planning_session import PlanningSession


def add_selection(session: PlanningSession, selection: VendorSelection, timestamp: float | None = None) -> PlanningSession:
    """Append a vendor selection to the session."""
    return PlanningSession(
        state=session.state,
        profile=session.profile,
        selections=session.selections + (selection,),
        priorities=dict(session.priorities),
        updated_at=timestamp if timestamp is not None else session.updated_at,
    )


def remove_selection(session: PlanningSession, index: int, timestamp: float | None = None) -> PlanningSession:
    """Drop the selection at `index`. Raises IndexError for an unknown index."""
    if index < 0 or index >= len(session.selections):
        raise IndexError(f"No selection at index {index}")
    selections = session.selections[:index] + session.selections[index + 1 :]
    return PlanningSession(
        state=session.state,
        profile=session.profile,
        selections=selections,
        priorities=dict(session.priorities),
        updated_at=timestamp if timestamp is not None else session.updated_at,
    )


def set_priorities(session: PlanningSession, priorities: dict[str, float], timestamp: float | None = None) -> PlanningSession:
    """Replace the category priority weights."""
    return PlanningSession(
        state=session.state,
        profile=session.profile,
        selections=session.selections,
        priorities={c: float(p) for c, p in priorities.items() if c},
        updated_at=timestamp if timestamp is not None else session.updated_at,
    )
