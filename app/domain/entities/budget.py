from __future__ import annotations

from dataclasses import dataclass, field

# category -> allocated dollars; may go negative after reallocation
BudgetAllocation = dict[str, float]


@dataclass(frozen=True)
class VendorSelection:
    category: str
    price: float | None = None  # None means "not yet priced"
    essential: bool = False
    vendor_name: str | None = None


@dataclass(frozen=True)
class CategoryStatus:
    category: str
    allocated: float
    spent: float
    remaining: float
    percent_used: float
    over_budget: bool


@dataclass(frozen=True)
class BudgetContext:
    total_budget: float
    selections: tuple[VendorSelection, ...] = ()
    event_type: str | None = None
    priorities: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetOverview:
    total_budget: float
    total_spent: float
    remaining: float
    allocation: BudgetAllocation  # template plan for the total budget
    rebalanced: BudgetAllocation  # what is left per category after selections
    warnings: list[str]
    recommendations: list[str]
    status: list[CategoryStatus]
