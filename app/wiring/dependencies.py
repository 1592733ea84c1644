from functools import lru_cache
import logging

from app.core.config import settings
from app.infrastructure.llm.mock_llm import MockLLM
from app.infrastructure.llm.openai_llm import OpenAILLM
from app.infrastructure.store.json_store import JsonConversationStore
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.application.use_cases.session_budget import SessionBudgetUseCase
from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.conversation_flow import ConversationFlow
from app.domain.entities.event_template import default_template_catalog


_conversation_store: MemoryConversationStore | JsonConversationStore | None = None


@lru_cache
def get_llm():
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM()
    logging.getLogger(__name__).info("OPENAI_API_KEY missing, using MockLLM")
    return MockLLM()


def get_conversation_store() -> MemoryConversationStore | JsonConversationStore:
    global _conversation_store
    if _conversation_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _conversation_store = JsonConversationStore(data_dir=settings.DATA_DIR, history_limit=settings.HISTORY_LIMIT)
        else:
            _conversation_store = MemoryConversationStore(history_limit=settings.HISTORY_LIMIT)
    return _conversation_store


@lru_cache
def get_budget_engine() -> BudgetEngine:
    return BudgetEngine(templates=default_template_catalog())


@lru_cache
def get_conversation_flow() -> ConversationFlow:
    return ConversationFlow()


def get_chat_use_case() -> HandleChatMessageUseCase:
    return HandleChatMessageUseCase(
        store=get_conversation_store(),
        llm=get_llm(),
        flow=get_conversation_flow(),
        engine=get_budget_engine(),
    )


def get_session_budget_use_case() -> SessionBudgetUseCase:
    return SessionBudgetUseCase(store=get_conversation_store(), engine=get_budget_engine())
