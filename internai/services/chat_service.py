from __future__ import annotations

import logging
from typing import Sequence

from internai.ai.prompts import CHAT_SYSTEM_PROMPT
from internai.ai.types import AIClient, ChatMessage
from internai.schemas.ai import ChatHistoryItem

logger = logging.getLogger(__name__)

EMPTY_REPLY = "Sorry, I could not generate a response."
_max_history = 20


def _history_text(item: ChatHistoryItem) -> str:
    if item.parts:
        first = item.parts[0]
        if isinstance(first, dict) and first.get("text"):
            return str(first["text"])
    return item.content or ""


def build_chat_messages(message: str, history: Sequence[ChatHistoryItem] | None) -> list[ChatMessage]:
    messages = [ChatMessage(role="system", content=CHAT_SYSTEM_PROMPT)]
    for item in list(history or [])[-_max_history:]:
        if item.role == "user":
            messages.append(ChatMessage(role="user", content=_history_text(item)))
        elif item.role in {"model", "assistant"}:
            messages.append(ChatMessage(role="assistant", content=_history_text(item)))
    messages.append(ChatMessage(role="user", content=message.strip()))
    return messages


def career_chat(llm: AIClient, message: str, history: Sequence[ChatHistoryItem] | None = None) -> str:
    messages = build_chat_messages(message, history)
    reply = llm.complete(messages, temperature=0.8, max_tokens=500, json_mode=False)
    logger.info("career_chat history=%s reply_chars=%s", len(messages) - 2, len(reply or ""))
    return (reply or "").strip() or EMPTY_REPLY
