from fastapi import APIRouter, Depends

from app.api.v1.schemas import (
    AllocateRequestSchema, AllocationResponseSchema,
    BudgetOverviewSchema, EventTemplateSchema, OverageRequestSchema, OverageResponseSchema,
    RebalanceRequestSchema, ReallocateRequestSchema,
    RecommendationsRequestSchema, RecommendationsResponseSchema,
)
from app.api.v1.sessions import overview_response
from app.application.use_cases.session_budget import SessionBudgetUseCase
from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.budget_recommender import build_policy
from app.domain.entities.budget import BudgetContext
from app.wiring.dependencies import get_budget_engine, get_session_budget_use_case

router = APIRouter()


@router.get("/templates", response_model=list[EventTemplateSchema])
def templates(engine: BudgetEngine = Depends(get_budget_engine)):
    catalog = engine.templates
    return [
        EventTemplateSchema(
            event_type=t.event_type,
            shares=dict(t.shares),
            must_have=list(t.must_have),
            nice_to_have=list(t.nice_to_have),
        )
        for t in (catalog.get(name) for name in catalog.event_types())
    ]


@router.post("/allocate", response_model=AllocationResponseSchema)
def allocate(
    req: AllocateRequestSchema,
    engine: BudgetEngine = Depends(get_budget_engine),
):
    return AllocationResponseSchema(allocation=engine.allocate(req.total_budget, req.event_type))


@router.post("/reallocate", response_model=AllocationResponseSchema)
def reallocate(
    req: ReallocateRequestSchema,
    engine: BudgetEngine = Depends(get_budget_engine),
):
    selections = [s.to_domain() for s in req.selections]
    return AllocationResponseSchema(
        allocation=engine.reallocate(req.current_allocation, selections, req.total_budget)
    )


@router.post("/rebalance", response_model=AllocationResponseSchema)
def rebalance(
    req: RebalanceRequestSchema,
    engine: BudgetEngine = Depends(get_budget_engine),
):
    selections = [s.to_domain() for s in req.selections]
    return AllocationResponseSchema(allocation=engine.rebalance(req.total_budget, req.event_type, selections))


@router.post("/overage", response_model=OverageResponseSchema)
def overage(
    req: OverageRequestSchema,
    engine: BudgetEngine = Depends(get_budget_engine),
):
    selections = [s.to_domain() for s in req.selections]
    return OverageResponseSchema(warnings=engine.overage_warnings(req.allocation, selections))


@router.post("/recommendations", response_model=RecommendationsResponseSchema)
def recommendations(
    req: RecommendationsRequestSchema,
    engine: BudgetEngine = Depends(get_budget_engine),
):
    policy = build_policy(req.policy.value, templates=engine.templates)
    context = BudgetContext(
        total_budget=req.total_budget,
        selections=tuple(s.to_domain() for s in req.selections),
        event_type=req.event_type,
        priorities=dict(req.priorities),
    )
    return RecommendationsResponseSchema(policy=req.policy, recommendations=engine.recommend(policy, context))


@router.post("/overview", response_model=BudgetOverviewSchema)
def overview(
    req: RecommendationsRequestSchema,
    uc: SessionBudgetUseCase = Depends(get_session_budget_use_case),
):
    context = BudgetContext(
        total_budget=req.total_budget,
        selections=tuple(s.to_domain() for s in req.selections),
        event_type=req.event_type,
        priorities=dict(req.priorities),
    )
    return overview_response(uc.compute_overview(context))
