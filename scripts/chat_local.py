#!/usr/bin/env python3
"""
Interactive local planning chat (no HTTP).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable thread_id for the session
- Sends your typed messages through the same HandleChatMessageUseCase the API uses
- Prints the dialog state, the parsed event profile and the reply text
- /select and /budget drive the session budget the way the dashboard does
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from app.domain.entities.budget import VendorSelection
from app.wiring.dependencies import get_chat_use_case, get_conversation_store, get_session_budget_use_case


def _print_header(thread_id: str) -> None:
    print("\nPlannerly Local Chat")
    print("-" * 60)
    print(f"thread_id: {thread_id}")
    print("Type your message and press Enter.")
    print("Commands: /new, /history, /select <category> <price>, /budget, /quit, /help")
    print("-" * 60)


def _print_budget(thread_id: str) -> None:
    overview = get_session_budget_use_case().overview(thread_id)
    print("\n--- Budget ---")
    print(f"total: ${overview.total_budget:,.0f}  spent: ${overview.total_spent:,.0f}  remaining: ${overview.remaining:,.0f}")
    for row in overview.status:
        flag = "  OVER" if row.over_budget else ""
        print(f"  {row.category:<14} ${row.spent:>8,.0f} / ${row.allocated:>8,.0f}{flag}")
    for warning in overview.warnings:
        print(f"! {warning}")
    for rec in overview.recommendations:
        print(f"- {rec}")


def main() -> None:
    thread_id = os.getenv("CHAT_THREAD_ID", "local_user_1")
    use_case = get_chat_use_case()
    store = get_conversation_store()

    _print_header(thread_id)
    _, greeting = use_case.start(thread_id)
    print(f"(assistant) {greeting}")

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new  -> start a new thread_id")
            print("  /history -> show last 10 messages")
            print("  /select <category> [price] -> record a vendor selection")
            print("  /budget -> show allocation, warnings and recommendations")
            print("  /quit -> exit")
            continue
        if cmd == "/new":
            thread_id = f"local_user_{int(time.time())}"
            _, greeting = use_case.start(thread_id)
            print(f"New thread_id: {thread_id}")
            print(f"(assistant) {greeting}")
            continue
        if cmd == "/history":
            print("\n--- History (last 10) ---")
            for item in store.get_recent_messages(thread_id, limit=10):
                print(f"{item.get('role')}: {item.get('content', '')}")
            continue
        if cmd.startswith("/select"):
            parts = user_text.split()
            if len(parts) < 2:
                print("Usage: /select <category> [price]")
                continue
            try:
                price = float(parts[2]) if len(parts) > 2 else None
            except ValueError:
                print(f"Not a price: {parts[2]}")
                continue
            get_session_budget_use_case().select_vendor(thread_id, VendorSelection(category=parts[1], price=price))
            _print_budget(thread_id)
            continue
        if cmd == "/budget":
            _print_budget(thread_id)
            continue

        reply = use_case.execute(thread_id=thread_id, text=user_text)

        print("\n--- Decision ---")
        print(f"state: {reply.state.value}")
        profile = {k: v for k, v in reply.profile.to_payload().items() if v not in (None, [])}
        print(f"profile: {profile}")
        if reply.used_fallback:
            print("llm: failed, used flow prompt")
        if reply.allocation:
            print(f"allocation: {reply.allocation}")

        print("\n--- Reply ---")
        print(reply.text.strip() or "(empty reply)")
        print("-" * 60)


if __name__ == "__main__":
    main()
