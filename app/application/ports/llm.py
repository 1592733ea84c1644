from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.domain.entities.event_profile import EventProfile
from app.domain.entities.message import ChatMessage


@dataclass(frozen=True)
class PlannerTurn:
    profile: EventProfile
    next_question: str
    planning_complete: bool = False
    allocation: dict[str, float] | None = None


class LLMPort(ABC):
    @abstractmethod
    def complete_chat(
        self,
        turn: PlannerTurn,
        messages: list[ChatMessage],
        thread_id: str,
    ) -> str:
        """
        Produce the assistant's next message for a planning conversation.

        Requirements:
        - Return a non-empty, stripped string
        - Unless `turn.planning_complete`, the reply should ask `turn.next_question`
        - `messages` are in chronological order, user and assistant turns only

        Raises:
            LLMUpstreamError: provider or network failure
            LLMContractError: empty or unusable output
        """
        raise NotImplementedError
