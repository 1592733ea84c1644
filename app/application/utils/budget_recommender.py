from __future__ import annotations

from abc import ABC, abstractmethod

from app.application.utils.budget_math import spent_by_category, total_spent
from app.domain.entities.budget import BudgetContext
from app.domain.entities.event_template import TemplateCatalog, default_template_catalog

UNDER_INVESTED_RATIO = 0.5
NEAR_LIMIT_RATIO = 0.1
OVERSPEND_RATIO = 1.2


class RecommendationPolicy(ABC):
    name: str = ""

    @abstractmethod
    def recommend(self, context: BudgetContext) -> list[str]:
        """
        Produce advisory budget messages for the given context.

        Requirements:
        - Must never raise, whatever the inputs (zero budget, no selections, no template)
        - Wording is advisory; callers rely only on which conditions trigger a message
        """
        raise NotImplementedError


class TemplateFractionPolicy(RecommendationPolicy):
    """Compares spend against the event type's template shares."""

    name = "template"

    def __init__(self, templates: TemplateCatalog | None = None) -> None:
        self._templates = templates or default_template_catalog()

    def recommend(self, context: BudgetContext) -> list[str]:
        total_budget = context.total_budget
        template = self._templates.get(context.event_type)
        shares = dict(template.shares) if template else {}
        spent = spent_by_category(context.selections)

        recommendations: list[str] = []
        for category, fraction in shares.items():
            allocated = fraction * total_budget
            if allocated > 0 and spent.get(category, 0.0) / allocated < UNDER_INVESTED_RATIO:
                recommendations.append(f"Consider investing more in {category}.")

        remaining = total_budget - total_spent(context.selections)
        if total_budget <= 0 or remaining / total_budget < NEAR_LIMIT_RATIO:
            recommendations.append("You are nearing your budget limit. Look for more cost-effective options.")
        elif template and template.must_have:
            recommendations.append(
                "You have room in your budget. You might consider splurging on must-have items like "
                f"{', '.join(template.must_have)}."
            )
        else:
            recommendations.append("You have room in your budget. You might consider splurging on must-have items.")

        return recommendations


class UserPriorityPolicy(RecommendationPolicy):
    """Compares spend against each category's priority-weighted share of the total."""

    name = "priority"

    def recommend(self, context: BudgetContext) -> list[str]:
        total_budget = context.total_budget
        priorities = {c: float(p or 0) for c, p in (context.priorities or {}).items()}
        spent = spent_by_category(context.selections)
        remaining = total_budget - sum(spent.values())

        recommendations: list[str] = []
        if remaining < 0:
            recommendations.append(
                f"You are currently over budget by ${abs(remaining):.0f}. "
                "Consider scaling back on non-essential categories or negotiating lower rates."
            )
        elif remaining > 0:
            recommendations.append(
                f"You have ${remaining:.0f} remaining in your budget. "
                "Consider investing more in high priority categories or adding nice-to-have elements."
            )

        # sorted() is stable, so equal priorities keep their input order
        categories = sorted(priorities, key=lambda c: priorities[c], reverse=True)
        weight_total = sum(priorities.values())

        for category in categories:
            priority = priorities[category]
            spent_in_category = spent.get(category, 0.0)
            expected = priority / weight_total * total_budget if weight_total else 0.0

            if priority > 0 and remaining > 0 and spent_in_category < UNDER_INVESTED_RATIO * expected:
                recommendations.append(
                    f"You still have room to enhance your {category} - consider allocating more budget "
                    "here to better reflect your preferences."
                )
            if spent_in_category > expected * OVERSPEND_RATIO:
                recommendations.append(
                    f"You are spending a lot on {category}. To stay on track, consider choosing a more "
                    "affordable option or trimming extras in this category."
                )

        if not categories:
            recommendations.append("Set priorities for your categories to get tailored spending suggestions.")
        elif remaining > 0:
            recommendations.append(
                f"With budget left over, you could splurge on your top priority: {categories[0]}. "
                "Look for premium options or added services in this category."
            )
        else:
            recommendations.append(
                "Since funds are tight, focus on essentials and look for savings in lower priority "
                f"areas like {categories[-1]}."
            )

        return recommendations


def build_policy(name: str, templates: TemplateCatalog | None = None) -> RecommendationPolicy:
    if (name or "").strip().lower() == UserPriorityPolicy.name:
        return UserPriorityPolicy()
    return TemplateFractionPolicy(templates=templates)
