from __future__ import annotations

import json
import logging
import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from app.application.ports.conversation_store import ConversationStorePort
from app.domain.entities.budget import VendorSelection
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.event_profile import EventProfile
from app.domain.entities.planning_session import PlanningSession

_SAFE_THREAD_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class JsonConversationStore(ConversationStorePort):
    def __init__(self, data_dir: str = "./data/threads", history_limit: int = 50) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._history_limit = history_limit
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, thread_id: str) -> threading.Lock:
        """Get or create a lock for a thread_id."""
        with self._lock_lock:
            if thread_id not in self._locks:
                self._locks[thread_id] = threading.Lock()
            return self._locks[thread_id]

    def _get_file_path(self, thread_id: str) -> Path:
        """Get the file path for a thread_id."""
        if not _SAFE_THREAD_ID.fullmatch(thread_id or ""):
            raise ValueError(f"Invalid thread_id: {thread_id!r}")
        return self._data_dir / f"{thread_id}.json"

    def _default_thread_data(self, thread_id: str) -> dict[str, Any]:
        return {
            "thread_id": thread_id,
            "session": None,
            "messages": [],
            "version": 1,
        }

    def _load_thread_data(self, thread_id: str) -> dict[str, Any]:
        """Load thread data from JSON file, return default if missing."""
        file_path = self._get_file_path(thread_id)
        if not file_path.exists():
            return self._default_thread_data(thread_id)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if "version" not in data:
                data["version"] = 1
            return data
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            # Corrupted file: start the thread over rather than failing the request
            self._logger.warning("Unreadable thread file, using defaults", extra={"thread_id": thread_id, "error": str(e)})
            return self._default_thread_data(thread_id)

    def _save_thread_data(self, thread_id: str, data: dict[str, Any]) -> None:
        """Save thread data to JSON file atomically."""
        file_path = self._get_file_path(thread_id)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def _serialize_session(self, session: PlanningSession) -> dict[str, Any]:
        """Serialize PlanningSession to dict."""
        return {
            "state": session.state.value,
            "profile": session.profile.to_payload(),
            "selections": [
                {
                    "category": s.category,
                    "price": s.price,
                    "essential": s.essential,
                    "vendor_name": s.vendor_name,
                }
                for s in session.selections
            ],
            "priorities": dict(session.priorities),
            "updated_at": session.updated_at,
        }

    def _deserialize_session(self, data: dict[str, Any] | None) -> PlanningSession:
        """Deserialize dict to PlanningSession."""
        if not data:
            return PlanningSession()

        selections = []
        for raw in data.get("selections") or []:
            if not isinstance(raw, dict) or not raw.get("category"):
                continue
            price = raw.get("price")
            selections.append(
                VendorSelection(
                    category=str(raw["category"]),
                    price=float(price) if price is not None else None,
                    essential=bool(raw.get("essential", False)),
                    vendor_name=raw.get("vendor_name"),
                )
            )

        return PlanningSession(
            state=ConversationState.parse(data.get("state")),
            profile=EventProfile.from_payload(data.get("profile")),
            selections=tuple(selections),
            priorities={str(c): float(p) for c, p in (data.get("priorities") or {}).items()},
            updated_at=data.get("updated_at"),
        )

    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        """Get message history for a thread."""
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            return data.get("messages", [])

    def get_recent_messages(self, thread_id: str, limit: int = 10) -> list[dict[str, Any]]:
        """Get recent messages for context."""
        messages = self.get_history(thread_id)
        return messages[-limit:] if messages else []

    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        """Append a message to thread history."""
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            messages = data.get("messages", [])

            messages.append(
                {
                    "role": role,
                    "content": text,
                    "ts": datetime.now().timestamp(),
                    "meta": dict(meta or {}),
                }
            )

            # Keep last N messages
            if len(messages) > self._history_limit:
                messages = messages[-self._history_limit :]

            data["messages"] = messages
            self._save_thread_data(thread_id, data)

    def has_session(self, thread_id: str) -> bool:
        with self._get_lock(thread_id):
            return self._load_thread_data(thread_id).get("session") is not None

    def get_session(self, thread_id: str) -> PlanningSession:
        """Get planning session for a thread."""
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            return self._deserialize_session(data.get("session"))

    def set_session(self, thread_id: str, session: PlanningSession) -> None:
        """Set planning session for a thread."""
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            data["session"] = self._serialize_session(session)
            self._save_thread_data(thread_id, data)
