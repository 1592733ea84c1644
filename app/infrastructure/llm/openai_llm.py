from __future__ import annotations

from openai import OpenAI

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.llm import LLMPort, PlannerTurn
from app.core.config import settings
from app.domain.entities.message import ChatMessage
from app.infrastructure.llm.prompts import build_planner_system_prompt

MAX_CONTEXT_MESSAGES = 20


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Contract guarantees:
    - complete_chat returns a non-empty str
    - Raises:
        LLMUpstreamError: networking/provider failures
        LLMContractError: empty response
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(api_key=settings.OPENAI_API_KEY)

    def complete_chat(self, turn: PlannerTurn, messages: list[ChatMessage], thread_id: str) -> str:
        system_prompt = build_planner_system_prompt(
            assistant_name=settings.ASSISTANT_NAME,
            profile=turn.profile,
            next_question=turn.next_question,
            planning_complete=turn.planning_complete,
            allocation=turn.allocation,
        )
        chat = [{"role": "system", "content": system_prompt}]
        for m in messages[-MAX_CONTEXT_MESSAGES:]:
            if m.role in ("user", "assistant") and m.content.strip():
                chat.append({"role": m.role, "content": m.content})

        return self._call_text(
            model=settings.OPENAI_MODEL_CHAT,
            messages=chat,
            temperature=settings.OPENAI_TEMPERATURE_CHAT,
            thread_id=thread_id,
        )

    def _call_text(self, model: str, messages: list[dict[str, str]], temperature: float, thread_id: str | None = None) -> str:
        try:
            kwargs = {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": 400,
            }
            if thread_id:
                kwargs["user"] = thread_id

            resp = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content
