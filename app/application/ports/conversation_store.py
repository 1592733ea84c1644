from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.planning_session import PlanningSession


class ConversationStorePort(ABC):
    @abstractmethod
    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def has_session(self, thread_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_session(self, thread_id: str) -> PlanningSession:
        """Return the stored session, or a fresh one in the INITIAL state."""
        raise NotImplementedError

    @abstractmethod
    def set_session(self, thread_id: str, session: PlanningSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_recent_messages(self, thread_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """
        Get recent messages for context.
        Returns the last N messages from the thread history.
        """
        raise NotImplementedError
