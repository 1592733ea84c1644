from __future__ import annotations

from app.application.ports.llm import LLMPort, PlannerTurn
from app.domain.entities.message import ChatMessage


class MockLLM(LLMPort):
    """Offline stand-in that asks the flow's next question verbatim."""

    def complete_chat(self, turn: PlannerTurn, messages: list[ChatMessage], thread_id: str) -> str:
        question = turn.next_question.strip() or "Tell me more about your event."
        if turn.planning_complete and turn.allocation:
            split = ", ".join(f"{c} ${a:,.0f}" for c, a in turn.allocation.items())
            return f"{question} Suggested split: {split}."

        last_user = next((m.content for m in reversed(messages) if m.role == "user"), "")
        if last_user.strip():
            return f"Got it. {question}"
        return question
