from __future__ import annotations

import logging
import time

from app.application.exceptions import SelectionIndexError, SessionNotFoundError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.budget_math import total_spent
from app.application.utils.budget_recommender import UserPriorityPolicy
from app.application.utils.state_helpers import add_selection, remove_selection, set_priorities
from app.domain.entities.budget import BudgetContext, BudgetOverview, VendorSelection
from app.domain.entities.planning_session import PlanningSession


class SessionBudgetUseCase:
    """Vendor selections, priorities and the budget dashboard for a planning session."""

    def __init__(self, store: ConversationStorePort, engine: BudgetEngine) -> None:
        self._store = store
        self._engine = engine
        self._priority_policy = UserPriorityPolicy()
        self._logger = logging.getLogger(__name__)

    def select_vendor(self, thread_id: str, selection: VendorSelection) -> PlanningSession:
        session = self._require_session(thread_id)
        updated = add_selection(session, selection, timestamp=time.time())
        self._store.set_session(thread_id, updated)
        self._logger.info("Vendor selected", extra={"thread_id": thread_id, "category": selection.category})
        return updated

    def unselect_vendor(self, thread_id: str, index: int) -> PlanningSession:
        session = self._require_session(thread_id)
        try:
            updated = remove_selection(session, index, timestamp=time.time())
        except IndexError as e:
            raise SelectionIndexError(str(e)) from e
        self._store.set_session(thread_id, updated)
        return updated

    def update_priorities(self, thread_id: str, priorities: dict[str, float]) -> PlanningSession:
        session = self._require_session(thread_id)
        updated = set_priorities(session, priorities, timestamp=time.time())
        self._store.set_session(thread_id, updated)
        return updated

    def overview(self, thread_id: str, total_budget: float | None = None) -> BudgetOverview:
        session = self._require_session(thread_id)
        budget = total_budget if total_budget is not None else (session.profile.budget_amount or 0.0)
        return self.compute_overview(
            BudgetContext(
                total_budget=budget,
                selections=session.selections,
                event_type=session.profile.event_type,
                priorities=dict(session.priorities),
            )
        )

    def compute_overview(self, context: BudgetContext) -> BudgetOverview:
        allocation = self._engine.allocate(context.total_budget, context.event_type)
        rebalanced = self._engine.reallocate(allocation, context.selections, context.total_budget)
        spent = total_spent(context.selections)

        recommendations = self._engine.recommendations(context.total_budget, context.selections, context.event_type)
        if context.priorities:
            recommendations += self._engine.recommend(self._priority_policy, context)

        return BudgetOverview(
            total_budget=context.total_budget,
            total_spent=spent,
            remaining=context.total_budget - spent,
            allocation=allocation,
            rebalanced=rebalanced,
            warnings=self._engine.overage_warnings(allocation, context.selections),
            recommendations=recommendations,
            status=self._engine.category_status(allocation, context.selections),
        )

    def _require_session(self, thread_id: str) -> PlanningSession:
        if not self._store.has_session(thread_id):
            raise SessionNotFoundError(f"No planning session for thread {thread_id}")
        return self._store.get_session(thread_id)
