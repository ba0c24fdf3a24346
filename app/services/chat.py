import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import ChatError
from app.models.agenda import FilePayload
from app.models.chat import HistoryTurn
from app.services.llm import document_part, text_part

logger = logging.getLogger("agenda_assistant")

SYSTEM_INSTRUCTION = (
    "You are a helpful AI meeting assistant. You answer questions about the uploaded "
    "document and the generated agenda. Be concise and professional."
)
CONTEXT_LEAD_IN = "Here is the document context for our conversation:"
APOLOGY_TEXT = "Sorry, I encountered an error processing your request."
EMPTY_REPLY_TEXT = "I couldn't generate a response."

_PROVIDER_ROLES = {"user": "user", "model": "assistant"}


@dataclass(frozen=True)
class ChatResult:
    text: Optional[str] = None
    error: Optional[ChatError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_chat_messages(
    history: Sequence[HistoryTurn],
    new_message: str,
    context_file: Optional[FilePayload] = None,
) -> List[Dict[str, Any]]:
    """
    Whole conversation for one request: system instruction, every prior
    turn, then the new user message. No provider-side session is kept, so
    the history is resent on every call.

    The document is attached only when the history is empty, i.e. on the
    first message of a conversation; later turns rely on the model's memory
    of that first turn.
    """
    messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_INSTRUCTION}]
    for turn in history:
        messages.append({"role": _PROVIDER_ROLES[turn.role], "content": turn.text})

    parts: List[Dict[str, Any]] = [text_part(new_message)]
    if not history and context_file is not None:
        parts = [text_part(CONTEXT_LEAD_IN), document_part(context_file)] + parts
    messages.append({"role": "user", "content": parts})
    return messages


async def exchange_chat_message(
    history: Sequence[HistoryTurn],
    new_message: str,
    client: AsyncOpenAI,
    context_file: Optional[FilePayload] = None,
) -> ChatResult:
    try:
        messages = build_chat_messages(history, new_message, context_file)
        logger.info(
            "Chat request: %d prior turns, file attached: %s",
            len(history),
            not history and context_file is not None,
        )
        completion = await client.chat.completions.create(
            model=settings.CHAT_MODEL,
            messages=messages,
        )
        text = completion.choices[0].message.content
    except Exception as e:
        logger.exception("Chat error")
        return ChatResult(error=ChatError(str(e) or e.__class__.__name__))
    return ChatResult(text=text or EMPTY_REPLY_TEXT)


async def send_chat_message(
    history: Sequence[HistoryTurn],
    new_message: str,
    client: AsyncOpenAI,
    context_file: Optional[FilePayload] = None,
) -> str:
    """Never raises: failures come back as the fixed apology text."""
    result = await exchange_chat_message(history, new_message, client, context_file)
    if not result.ok:
        return APOLOGY_TEXT
    return result.text
