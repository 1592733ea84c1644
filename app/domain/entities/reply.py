from dataclasses import dataclass

from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.event_profile import EventProfile


@dataclass(frozen=True)
class ChatReply:
    text: str
    state: ConversationState
    profile: EventProfile
    allocation: dict[str, float] | None = None
    used_fallback: bool = False
