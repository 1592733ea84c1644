from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.budget_math import round_half_up
from app.domain.entities.budget import VendorSelection
from app.domain.entities.event_template import EventTypeTemplate, TemplateCatalog


def test_allocate_wedding():
    engine = BudgetEngine()
    assert engine.allocate(1000, "wedding") == {
        "venue": 300,
        "catering": 250,
        "photography": 120,
        "flowers": 80,
        "music": 70,
        "misc": 180,
    }


def test_allocate_is_case_insensitive_and_unknown_is_empty():
    engine = BudgetEngine()
    assert engine.allocate(1000, "  Birthday ")["entertainment"] == 200
    assert engine.allocate(1000, "bar mitzvah") == {}
    assert engine.allocate(1000, None) == {}


def test_allocate_with_injected_templates():
    catalog = TemplateCatalog(templates={"gala": EventTypeTemplate(event_type="gala", shares={"venue": 0.5, "band": 0.5})})
    engine = BudgetEngine(templates=catalog)
    assert engine.allocate(3000, "gala") == {"venue": 1500, "band": 1500}
    assert engine.allocate(3000, "wedding") == {}


def test_total_spent_ignores_unpriced():
    engine = BudgetEngine()
    assert engine.total_spent([VendorSelection("venue", 500), VendorSelection("catering", None)]) == 500
    assert engine.total_spent([]) == 0


def test_reallocate_redistributes_remaining():
    engine = BudgetEngine()
    result = engine.reallocate({"a": 100, "b": 100}, [VendorSelection("a", 50)], 200)
    assert result == {"a": 50, "b": 100}


def test_reallocate_of_fresh_allocation_without_selections_is_unchanged():
    engine = BudgetEngine()
    # 999 rounds to category amounts that sum to 1000
    for total, event_type in ((999, "wedding"), (1000, "wedding"), (25000, "wedding"), (777, "birthday")):
        allocation = engine.allocate(total, event_type)
        assert engine.reallocate(allocation, [], total) == allocation


def test_reallocate_does_not_mutate_input():
    engine = BudgetEngine()
    current = {"a": 100, "b": 100}
    engine.reallocate(current, [VendorSelection("a", 50)], 200)
    assert current == {"a": 100, "b": 100}


def test_reallocate_unknown_category_goes_negative():
    engine = BudgetEngine()
    result = engine.reallocate({"a": 100}, [VendorSelection("cake", 30)], 100)
    assert result == {"a": 70, "cake": -30}


def test_reallocate_without_selections_keeps_allocation():
    engine = BudgetEngine()
    assert engine.reallocate({"a": 100, "b": 100}, [], 200) == {"a": 100, "b": 100}


def test_reallocate_overspent_leaves_values_unscaled():
    engine = BudgetEngine()
    assert engine.reallocate({"a": 100}, [VendorSelection("a", 150)], 100) == {"a": -50}
    # nothing left to hand out
    assert engine.reallocate({"a": 100, "b": 100}, [VendorSelection("a", 50)], 50) == {"a": 50, "b": 100}


def test_rebalance_is_repeatable():
    engine = BudgetEngine()
    selections = [VendorSelection("venue", 3500)]
    first = engine.rebalance(10000, "wedding", selections)
    second = engine.rebalance(10000, "wedding", selections)

    assert first == second
    assert first["venue"] == -500
    positives = sum(v for v in first.values() if v > 0)
    assert abs(positives - 6500) <= 3


def test_overage_warnings():
    engine = BudgetEngine()
    warnings = engine.overage_warnings({"venue": 100}, [VendorSelection("venue", 150)])
    assert len(warnings) == 1
    assert "venue" in warnings[0]
    assert "$50.00" in warnings[0]


def test_overage_sums_category_and_flags_unallocated():
    engine = BudgetEngine()
    warnings = engine.overage_warnings(
        {"venue": 100, "music": 500},
        [VendorSelection("venue", 60), VendorSelection("venue", 60), VendorSelection("music", 100), VendorSelection("cake", 20)],
    )
    assert warnings == ["venue is over budget by $20.00", "cake is over budget by $20.00"]


def test_category_status():
    engine = BudgetEngine()
    rows = engine.category_status(
        {"venue": 100, "catering": 200},
        [VendorSelection("venue", 150), VendorSelection("catering", 50), VendorSelection("cake", 20)],
    )

    assert [r.category for r in rows] == ["venue", "catering", "cake"]
    venue, catering, cake = rows
    assert venue.over_budget is True
    assert venue.percent_used == 100.0
    assert venue.remaining == -50
    assert catering.percent_used == 25.0
    assert catering.over_budget is False
    assert cake.allocated == 0
    assert cake.percent_used == 0.0
    assert cake.over_budget is True


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4) == 2
    assert round_half_up(-2.5) == -2
