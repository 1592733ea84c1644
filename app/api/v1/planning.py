from fastapi import APIRouter, Depends

from app.api.v1.schemas import (
    EventProfileSchema, FlowResponseSchema, FlowStepSchema,
    ParseEventRequestSchema, PriceEstimateRequestSchema, PriceEstimateResponseSchema,
    TimelineRequestSchema, TimelineTaskSchema, TimelineToggleRequestSchema,
)
from app.application.utils.conversation_flow import ConversationFlow
from app.application.utils.event_parser import parse_event
from app.application.utils.price_estimator import estimate_price, extract_prices_from_reviews, score_price_estimate
from app.application.utils.timeline import generate_timeline, toggle_task
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.message import ChatMessage
from app.domain.entities.timeline import TimelineTask
from app.wiring.dependencies import get_conversation_flow

router = APIRouter()


@router.get("/conversation/flow", response_model=FlowResponseSchema)
def conversation_flow(flow: ConversationFlow = Depends(get_conversation_flow)):
    def step(state: ConversationState) -> FlowStepSchema:
        return FlowStepSchema(state=state, prompt=flow.prompt_for(state), next_state=flow.next_state(state))

    return FlowResponseSchema(
        initial=step(ConversationState.INITIAL),
        steps=[step(s) for s in flow.config.order],
    )


@router.post("/planning/parse", response_model=EventProfileSchema)
def parse(req: ParseEventRequestSchema):
    profile = parse_event(
        [ChatMessage(role="user", content=m) for m in req.messages],
        require_currency_symbol=req.require_currency_symbol,
    )
    return EventProfileSchema(**profile.to_payload())


@router.post("/planning/timeline", response_model=list[TimelineTaskSchema])
def timeline(req: TimelineRequestSchema):
    return [
        TimelineTaskSchema(id=t.id, title=t.title, due_date=t.due_date, completed=t.completed)
        for t in generate_timeline(req.event_date)
    ]


@router.post("/planning/timeline/toggle", response_model=list[TimelineTaskSchema])
def timeline_toggle(req: TimelineToggleRequestSchema):
    tasks = [TimelineTask(id=t.id, title=t.title, due_date=t.due_date, completed=t.completed) for t in req.tasks]
    return [
        TimelineTaskSchema(id=t.id, title=t.title, due_date=t.due_date, completed=t.completed)
        for t in toggle_task(tasks, req.task_id)
    ]


@router.post("/planning/price-estimate", response_model=PriceEstimateResponseSchema)
def price_estimate(req: PriceEstimateRequestSchema):
    base = estimate_price(
        price_level=req.price_level,
        category=req.category,
        event_type=req.event_type,
        guest_count=req.guest_count,
    )
    review_prices = extract_prices_from_reviews(req.reviews)
    estimate, confidence = score_price_estimate([base] + [float(p) for p in review_prices])
    return PriceEstimateResponseSchema(
        base_estimate=base,
        review_prices=review_prices,
        estimate=estimate,
        confidence=confidence,
    )
