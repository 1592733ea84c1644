from __future__ import annotations

import logging
import time
import uuid
from dataclasses import replace

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.llm import LLMPort, PlannerTurn
from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.conversation_flow import ConversationFlow
from app.application.utils.event_parser import extract_budget, merge_profiles, parse_event
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.message import ChatMessage
from app.domain.entities.planning_session import PlanningSession
from app.domain.entities.reply import ChatReply


class HandleChatMessageUseCase:
    """
    One user turn of the planning dialog.

    The session's state is the question the user is answering. INITIAL's greeting
    already asks for the event type, so an answer in INITIAL counts as the first
    step of the flow.
    """

    def __init__(
        self,
        store: ConversationStorePort,
        llm: LLMPort,
        flow: ConversationFlow,
        engine: BudgetEngine,
    ) -> None:
        self._store = store
        self._llm = llm
        self._flow = flow
        self._engine = engine
        self._logger = logging.getLogger(__name__)

    def start(self, thread_id: str | None = None) -> tuple[str, str]:
        """Open a thread and return (thread_id, greeting)."""
        thread_id = thread_id or uuid.uuid4().hex
        if not self._store.has_session(thread_id):
            greeting = self._flow.prompt_for(ConversationState.INITIAL)
            self._store.set_session(thread_id, PlanningSession(updated_at=time.time()))
            self._store.append_message(thread_id, "assistant", greeting, meta={"state": ConversationState.INITIAL.value})
            return thread_id, greeting
        session = self._store.get_session(thread_id)
        return thread_id, self._flow.prompt_for(session.state)

    def execute(self, thread_id: str, text: str) -> ChatReply:
        now = time.time()
        session = self._store.get_session(thread_id)
        answering = self._answered_state(session.state)

        self._store.append_message(thread_id, "user", text, meta={"state": answering.value})

        history = self._history(thread_id)
        parsed = parse_event([m for m in history if m.role == "user"], require_currency_symbol=True)
        # history is windowed; the stored profile keeps answers that have scrolled out
        profile = merge_profiles(session.profile, replace(parsed, budget_amount=None, currency=None))

        # a bare number only counts as the budget when it answers the budget question
        budget = extract_budget(text) if answering == ConversationState.BUDGET else None
        budget = budget or extract_budget(text, require_symbol=True)
        if budget:
            profile = replace(profile, budget_amount=budget[0], currency=budget[1])

        next_state = self._flow.next_state(answering)
        planning_complete = self._flow.is_complete(next_state)

        allocation = None
        if planning_complete and profile.budget_amount and self._engine.templates.get(profile.event_type):
            allocation = self._engine.rebalance(profile.budget_amount, profile.event_type, session.selections)

        question = self._flow.prompt_for(next_state)
        turn = PlannerTurn(
            profile=profile,
            next_question=question,
            planning_complete=planning_complete,
            allocation=allocation,
        )

        used_fallback = False
        try:
            reply_text = self._llm.complete_chat(turn=turn, messages=history, thread_id=thread_id)
        except (LLMUpstreamError, LLMContractError) as e:
            self._logger.warning(
                "LLM reply failed, asking flow question instead",
                extra={"thread_id": thread_id, "state": next_state.value, "error": str(e)},
            )
            reply_text = question
            used_fallback = True

        self._store.append_message(thread_id, "assistant", reply_text, meta={"state": next_state.value})
        self._store.set_session(
            thread_id,
            PlanningSession(
                state=next_state,
                profile=profile,
                selections=session.selections,
                priorities=dict(session.priorities),
                updated_at=now,
            ),
        )

        self._logger.info(
            "Chat turn handled",
            extra={"thread_id": thread_id, "state": next_state.value, "event_type": profile.event_type},
        )

        return ChatReply(
            text=reply_text,
            state=next_state,
            profile=profile,
            allocation=allocation,
            used_fallback=used_fallback,
        )

    def _answered_state(self, current: ConversationState) -> ConversationState:
        order = self._flow.config.order
        if current == ConversationState.INITIAL and order:
            return order[0]
        return current

    def _history(self, thread_id: str) -> list[ChatMessage]:
        return [
            ChatMessage(role=str(m.get("role", "")), content=str(m.get("content", "")), timestamp=m.get("ts"))
            for m in self._store.get_history(thread_id)
        ]
