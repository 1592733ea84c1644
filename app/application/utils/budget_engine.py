from __future__ import annotations

from typing import Iterable

from app.application.utils.budget_math import round_half_up, spent_by_category, total_spent
from app.application.utils.budget_recommender import RecommendationPolicy, TemplateFractionPolicy
from app.domain.entities.budget import BudgetAllocation, BudgetContext, CategoryStatus, VendorSelection
from app.domain.entities.event_template import TemplateCatalog, default_template_catalog


class BudgetEngine:
    """
    Allocation, reallocation and overage checks over a fixed total budget.

    Every operation is total: unknown event types, unknown categories, missing
    prices and zero budgets degrade to empty or zero results instead of raising.
    """

    def __init__(self, templates: TemplateCatalog | None = None) -> None:
        self._templates = templates or default_template_catalog()
        self._template_policy = TemplateFractionPolicy(templates=self._templates)

    @property
    def templates(self) -> TemplateCatalog:
        return self._templates

    def allocate(self, total_budget: float, event_type: str | None) -> BudgetAllocation:
        # no normalization: shares that don't sum to 1.0 won't sum to total_budget either
        shares = self._templates.shares_for(event_type)
        return {category: round_half_up(fraction * total_budget) for category, fraction in shares.items()}

    def total_spent(self, selections: Iterable[VendorSelection]) -> float:
        return total_spent(selections)

    def reallocate(
        self,
        current_allocation: BudgetAllocation,
        selections: Iterable[VendorSelection],
        total_budget: float,
    ) -> BudgetAllocation:
        """
        Subtract selected prices from their categories, then spread what is left
        of the total across categories that still have money, proportionally.

        Not idempotent: the input allocation is treated as a snapshot, so feeding
        the output back in with the same selections subtracts them again. Use
        `rebalance` to recompute from the template every time.
        """
        selections = list(selections)
        allocation: BudgetAllocation = dict(current_allocation)

        for s in selections:
            if s.category and s.price is not None:
                allocation[s.category] = allocation.get(s.category, 0.0) - s.price

        remaining_categories = [c for c, v in allocation.items() if v > 0]
        remaining_budget = sum(allocation[c] for c in remaining_categories)

        available = total_budget - total_spent(selections)
        if remaining_budget > 0 and available > 0:
            for category in remaining_categories:
                portion = allocation[category] / remaining_budget
                allocation[category] = round_half_up(portion * available)

        return allocation

    def rebalance(
        self,
        total_budget: float,
        event_type: str | None,
        selections: Iterable[VendorSelection],
    ) -> BudgetAllocation:
        """Allocation for the full selection set, always computed from the template."""
        return self.reallocate(self.allocate(total_budget, event_type), selections, total_budget)

    def overage_warnings(
        self,
        allocation: BudgetAllocation,
        selections: Iterable[VendorSelection],
    ) -> list[str]:
        warnings: list[str] = []
        for category, spent in spent_by_category(selections).items():
            allocated = allocation.get(category, 0.0)
            if spent > allocated:
                warnings.append(f"{category} is over budget by ${spent - allocated:.2f}")
        return warnings

    def recommendations(
        self,
        total_budget: float,
        selections: Iterable[VendorSelection],
        event_type: str | None,
    ) -> list[str]:
        context = BudgetContext(
            total_budget=total_budget,
            selections=tuple(selections),
            event_type=event_type,
        )
        return self._template_policy.recommend(context)

    def recommend(self, policy: RecommendationPolicy, context: BudgetContext) -> list[str]:
        return policy.recommend(context)

    def category_status(
        self,
        allocation: BudgetAllocation,
        selections: Iterable[VendorSelection],
    ) -> list[CategoryStatus]:
        spent = spent_by_category(selections)
        categories = list(allocation) + [c for c in spent if c not in allocation]

        rows: list[CategoryStatus] = []
        for category in categories:
            allocated = allocation.get(category, 0.0)
            spent_in_category = spent.get(category, 0.0)
            percent = min(spent_in_category / allocated, 1.0) * 100 if allocated > 0 else 0.0
            rows.append(
                CategoryStatus(
                    category=category,
                    allocated=allocated,
                    spent=spent_in_category,
                    remaining=allocated - spent_in_category,
                    percent_used=round(percent, 1),
                    over_budget=spent_in_category > allocated,
                )
            )
        return rows
