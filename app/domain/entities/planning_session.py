from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.budget import VendorSelection
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.event_profile import EventProfile


@dataclass(frozen=True)
class PlanningSession:
    state: ConversationState = ConversationState.INITIAL
    profile: EventProfile = EventProfile()
    # durable budget state; allocations are always recomputed from these
    selections: tuple[VendorSelection, ...] = ()
    priorities: dict[str, float] = field(default_factory=dict)
    updated_at: float | None = None
