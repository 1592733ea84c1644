from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.conversation_state import ConversationState


DEFAULT_ORDER: tuple[ConversationState, ...] = (
    ConversationState.EVENT_TYPE,
    ConversationState.SCOPE,
    ConversationState.BUDGET,
    ConversationState.LOCATION,
    ConversationState.DATE,
    ConversationState.STYLE,
    ConversationState.PLANNING,
)

DEFAULT_PROMPTS: dict[ConversationState, str] = {
    ConversationState.INITIAL: "Hello! I'm Plannerly. What type of event are you planning?",
    ConversationState.EVENT_TYPE: "What kind of event is it (e.g. wedding, corporate retreat)?",
    ConversationState.SCOPE: "How many guests are you expecting and what is the overall scope?",
    ConversationState.BUDGET: "What is your approximate budget for this event?",
    ConversationState.LOCATION: "Where would you like the event to take place?",
    ConversationState.DATE: "Do you have a preferred date or timeframe?",
    ConversationState.STYLE: "Are there any particular themes or styles you have in mind?",
    ConversationState.PLANNING: "Great! I'll start planning and let you know when I have some options.",
}


@dataclass(frozen=True)
class FlowConfig:
    order: tuple[ConversationState, ...] = DEFAULT_ORDER
    prompts: dict[ConversationState, str] = field(default_factory=lambda: dict(DEFAULT_PROMPTS))
    terminal: ConversationState = ConversationState.PLANNING


class ConversationFlow:
    """
    Linear dialog state machine.

    Unknown states (including INITIAL, which is not part of the order) and the
    last state both advance to the terminal state. The terminal state loops on
    itself.
    """

    def __init__(self, config: FlowConfig | None = None) -> None:
        self._config = config or FlowConfig()

    @property
    def config(self) -> FlowConfig:
        return self._config

    def next_state(self, current: ConversationState) -> ConversationState:
        order = self._config.order
        try:
            idx = order.index(current)
        except ValueError:
            return self._config.terminal
        if idx == len(order) - 1:
            return self._config.terminal
        return order[idx + 1]

    def prompt_for(self, state: ConversationState) -> str:
        prompts = self._config.prompts
        if state in prompts:
            return prompts[state]
        return prompts.get(self._config.terminal, "")

    def is_complete(self, state: ConversationState) -> bool:
        return state == self._config.terminal
