from __future__ import annotations

from datetime import datetime
from typing import Any

from app.application.ports.conversation_store import ConversationStorePort
from app.domain.entities.planning_session import PlanningSession


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, history_limit: int = 30) -> None:
        self._threads: dict[str, list[dict[str, Any]]] = {}
        self._sessions: dict[str, PlanningSession] = {}
        self._history_limit = history_limit

    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        return list(self._threads.get(thread_id, []))

    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        self._threads.setdefault(thread_id, [])
        self._threads[thread_id].append(
            {
                "role": role,
                "content": text,
                "ts": datetime.now().timestamp(),
                "meta": dict(meta or {}),
            }
        )
        if len(self._threads[thread_id]) > self._history_limit:
            self._threads[thread_id] = self._threads[thread_id][-self._history_limit :]

    def has_session(self, thread_id: str) -> bool:
        return thread_id in self._sessions

    def get_session(self, thread_id: str) -> PlanningSession:
        return self._sessions.get(thread_id, PlanningSession())

    def set_session(self, thread_id: str, session: PlanningSession) -> None:
        self._sessions[thread_id] = session

    def get_recent_messages(self, thread_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """Get recent messages for context."""
        messages = self.get_history(thread_id)
        return messages[-limit:] if messages else []
