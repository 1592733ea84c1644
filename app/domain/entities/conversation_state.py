from enum import Enum


class ConversationState(str, Enum):
    INITIAL = "INITIAL"
    EVENT_TYPE = "EVENT_TYPE"
    SCOPE = "SCOPE"
    BUDGET = "BUDGET"
    LOCATION = "LOCATION"
    DATE = "DATE"
    STYLE = "STYLE"
    PLANNING = "PLANNING"

    @staticmethod
    def parse(value: "str | ConversationState | None") -> "ConversationState":
        if isinstance(value, ConversationState):
            return value
        try:
            return ConversationState(str(value or "").strip().upper())
        except ValueError:
            return ConversationState.INITIAL
