from fastapi import APIRouter, Depends, HTTPException, Path

from app.api.v1.schemas import (
    THREAD_ID_PATTERN,
    BudgetOverviewSchema, CategoryStatusSchema,
    ChatMessageSchema, ChatRequestSchema, ChatResponseSchema,
    EventProfileSchema, PrioritiesRequestSchema, SessionResponseSchema,
    StartChatRequestSchema, StartChatResponseSchema, VendorSelectionSchema,
)
from app.application.exceptions import SelectionIndexError, SessionNotFoundError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.application.use_cases.session_budget import SessionBudgetUseCase
from app.domain.entities.budget import BudgetOverview
from app.domain.entities.planning_session import PlanningSession
from app.wiring.dependencies import get_chat_use_case, get_conversation_store, get_session_budget_use_case

router = APIRouter()


@router.post("/chat/start", response_model=StartChatResponseSchema)
def start_chat(
    req: StartChatRequestSchema,
    uc: HandleChatMessageUseCase = Depends(get_chat_use_case),
):
    thread_id, greeting = uc.start(req.thread_id)
    return StartChatResponseSchema(thread_id=thread_id, reply=greeting)


@router.post("/chat", response_model=ChatResponseSchema)
def chat(
    req: ChatRequestSchema,
    uc: HandleChatMessageUseCase = Depends(get_chat_use_case),
):
    thread_id = req.thread_id
    if not thread_id:
        thread_id, _ = uc.start()
    reply = uc.execute(thread_id=thread_id, text=req.message)
    return ChatResponseSchema(
        thread_id=thread_id,
        reply=reply.text,
        state=reply.state,
        profile=EventProfileSchema(**reply.profile.to_payload()),
        allocation=reply.allocation,
    )


@router.get("/sessions/{thread_id}", response_model=SessionResponseSchema)
def get_session(
    thread_id: str = Path(pattern=THREAD_ID_PATTERN),
    store: ConversationStorePort = Depends(get_conversation_store),
):
    if not store.has_session(thread_id):
        raise HTTPException(status_code=404, detail=f"No planning session for thread {thread_id}")
    return _session_response(thread_id, store.get_session(thread_id), store.get_history(thread_id))


@router.post("/sessions/{thread_id}/selections", response_model=SessionResponseSchema)
def select_vendor(
    selection: VendorSelectionSchema,
    thread_id: str = Path(pattern=THREAD_ID_PATTERN),
    uc: SessionBudgetUseCase = Depends(get_session_budget_use_case),
):
    try:
        session = uc.select_vendor(thread_id, selection.to_domain())
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_response(thread_id, session)


@router.delete("/sessions/{thread_id}/selections/{index}", response_model=SessionResponseSchema)
def unselect_vendor(
    index: int,
    thread_id: str = Path(pattern=THREAD_ID_PATTERN),
    uc: SessionBudgetUseCase = Depends(get_session_budget_use_case),
):
    try:
        session = uc.unselect_vendor(thread_id, index)
    except (SessionNotFoundError, SelectionIndexError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_response(thread_id, session)


@router.put("/sessions/{thread_id}/priorities", response_model=SessionResponseSchema)
def update_priorities(
    req: PrioritiesRequestSchema,
    thread_id: str = Path(pattern=THREAD_ID_PATTERN),
    uc: SessionBudgetUseCase = Depends(get_session_budget_use_case),
):
    try:
        session = uc.update_priorities(thread_id, req.priorities)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_response(thread_id, session)


@router.get("/sessions/{thread_id}/budget", response_model=BudgetOverviewSchema)
def session_budget(
    thread_id: str = Path(pattern=THREAD_ID_PATTERN),
    total_budget: float | None = None,
    uc: SessionBudgetUseCase = Depends(get_session_budget_use_case),
):
    try:
        overview = uc.overview(thread_id, total_budget=total_budget)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return overview_response(overview)


def overview_response(overview: BudgetOverview) -> BudgetOverviewSchema:
    return BudgetOverviewSchema(
        total_budget=overview.total_budget,
        total_spent=overview.total_spent,
        remaining=overview.remaining,
        allocation=overview.allocation,
        rebalanced=overview.rebalanced,
        warnings=overview.warnings,
        recommendations=overview.recommendations,
        status=[
            CategoryStatusSchema(
                category=s.category,
                allocated=s.allocated,
                spent=s.spent,
                remaining=s.remaining,
                percent_used=s.percent_used,
                over_budget=s.over_budget,
            )
            for s in overview.status
        ],
    )


def _session_response(thread_id: str, session: PlanningSession, history: list[dict] | None = None) -> SessionResponseSchema:
    return SessionResponseSchema(
        thread_id=thread_id,
        state=session.state,
        profile=EventProfileSchema(**session.profile.to_payload()),
        selections=[
            VendorSelectionSchema(
                category=s.category,
                price=s.price,
                essential=s.essential,
                vendor_name=s.vendor_name,
            )
            for s in session.selections
        ],
        priorities=dict(session.priorities),
        updated_at=session.updated_at,
        history=[
            ChatMessageSchema(
                role=str(m.get("role", "")),
                content=str(m.get("content", "")),
                ts=m.get("ts"),
                meta=dict(m.get("meta") or {}),
            )
            for m in (history or [])
        ],
    )
