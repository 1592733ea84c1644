from datetime import date
from enum import Enum
from pydantic import BaseModel, Field
from typing import Any

from app.domain.entities.budget import VendorSelection
from app.domain.entities.conversation_state import ConversationState

THREAD_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"


class RecommendationPolicyName(str, Enum):
    template = "template"
    priority = "priority"


class VendorSelectionSchema(BaseModel):
    category: str = Field(min_length=1)
    price: float | None = None
    essential: bool = False
    vendor_name: str | None = None

    def to_domain(self) -> VendorSelection:
        return VendorSelection(
            category=self.category.strip(),
            price=self.price,
            essential=self.essential,
            vendor_name=self.vendor_name,
        )


class EventProfileSchema(BaseModel):
    event_type: str | None = None
    budget_amount: float | None = None
    currency: str | None = None
    location: str | None = None
    date: str | None = None
    styles: list[str] = Field(default_factory=list)


class StartChatRequestSchema(BaseModel):
    thread_id: str | None = Field(default=None, pattern=THREAD_ID_PATTERN)


class StartChatResponseSchema(BaseModel):
    thread_id: str
    reply: str


class ChatRequestSchema(BaseModel):
    thread_id: str | None = Field(default=None, pattern=THREAD_ID_PATTERN)
    message: str = Field(min_length=1, max_length=4000)


class ChatResponseSchema(BaseModel):
    thread_id: str
    reply: str
    state: ConversationState
    profile: EventProfileSchema
    allocation: dict[str, float] | None = None


class ChatMessageSchema(BaseModel):
    role: str
    content: str
    ts: float | None = None
    meta: dict[str, Any] = Field(default_factory=dict)


class SessionResponseSchema(BaseModel):
    thread_id: str
    state: ConversationState
    profile: EventProfileSchema
    selections: list[VendorSelectionSchema]
    priorities: dict[str, float]
    updated_at: float | None = None
    history: list[ChatMessageSchema] = Field(default_factory=list)


class PrioritiesRequestSchema(BaseModel):
    priorities: dict[str, float] = Field(default_factory=dict)


class FlowStepSchema(BaseModel):
    state: ConversationState
    prompt: str
    next_state: ConversationState


class FlowResponseSchema(BaseModel):
    initial: FlowStepSchema
    steps: list[FlowStepSchema]


class AllocateRequestSchema(BaseModel):
    total_budget: float
    event_type: str


class AllocationResponseSchema(BaseModel):
    allocation: dict[str, float]


class ReallocateRequestSchema(BaseModel):
    current_allocation: dict[str, float]
    selections: list[VendorSelectionSchema] = Field(default_factory=list)
    total_budget: float


class RebalanceRequestSchema(BaseModel):
    total_budget: float
    event_type: str
    selections: list[VendorSelectionSchema] = Field(default_factory=list)


class OverageRequestSchema(BaseModel):
    allocation: dict[str, float]
    selections: list[VendorSelectionSchema] = Field(default_factory=list)


class OverageResponseSchema(BaseModel):
    warnings: list[str]


class RecommendationsRequestSchema(BaseModel):
    total_budget: float
    selections: list[VendorSelectionSchema] = Field(default_factory=list)
    event_type: str | None = None
    priorities: dict[str, float] = Field(default_factory=dict)
    policy: RecommendationPolicyName = RecommendationPolicyName.template


class RecommendationsResponseSchema(BaseModel):
    policy: RecommendationPolicyName
    recommendations: list[str]


class CategoryStatusSchema(BaseModel):
    category: str
    allocated: float
    spent: float
    remaining: float
    percent_used: float
    over_budget: bool


class BudgetOverviewSchema(BaseModel):
    total_budget: float
    total_spent: float
    remaining: float
    allocation: dict[str, float]
    rebalanced: dict[str, float]
    warnings: list[str]
    recommendations: list[str]
    status: list[CategoryStatusSchema]


class ParseEventRequestSchema(BaseModel):
    messages: list[str] = Field(min_length=1)
    require_currency_symbol: bool = False


class TimelineRequestSchema(BaseModel):
    event_date: date


class TimelineTaskSchema(BaseModel):
    id: str
    title: str
    due_date: date
    completed: bool


class PriceEstimateRequestSchema(BaseModel):
    category: str
    event_type: str = "other"
    guest_count: int = Field(default=0, ge=0)
    price_level: int | None = Field(default=None, ge=0, le=4)
    reviews: list[str] = Field(default_factory=list)


class PriceEstimateResponseSchema(BaseModel):
    base_estimate: float
    review_prices: list[int]
    estimate: float
    confidence: float


class TimelineToggleRequestSchema(BaseModel):
    tasks: list[TimelineTaskSchema]
    task_id: str


class EventTemplateSchema(BaseModel):
    event_type: str
    shares: dict[str, float]
    must_have: list[str]
    nice_to_have: list[str]
