"""Chat transcript and its closed / open-idle / open-pending state."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from app.models.agenda import FilePayload
from app.models.chat import ChatTurn, HistoryTurn

logger = logging.getLogger("agenda_assistant")

GREETING = "Hi! I can help you with questions about the meeting agenda or the uploaded document."
CONNECTION_ERROR_TEXT = "Sorry, I'm having trouble connecting right now."

CLOSED = "closed"
OPEN_IDLE = "open-idle"
OPEN_PENDING = "open-pending"

ChatSender = Callable[[List[HistoryTurn], str, Optional[FilePayload]], Awaitable[str]]


class ChatPanel:
    def __init__(self, sender: ChatSender, greeting: Optional[str] = GREETING) -> None:
        self.sender = sender
        self.context_file: Optional[FilePayload] = None
        self.is_open = False
        self.is_pending = False
        self._turns: List[ChatTurn] = []
        if greeting:
            self._turns.append(ChatTurn(role="model", text=greeting))

    @property
    def transcript(self) -> List[ChatTurn]:
        return list(self._turns)

    @property
    def state(self) -> str:
        if not self.is_open:
            return CLOSED
        return OPEN_PENDING if self.is_pending else OPEN_IDLE

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def history(self) -> List[HistoryTurn]:
        return [HistoryTurn(role=t.role, text=t.text) for t in self._turns]

    async def submit(self, text: str) -> bool:
        """
        Send one message. Returns False when the text is blank or a request
        is already in flight; otherwise exactly two turns are appended, the
        user's immediately and the model's once the sender returns.
        """
        if not text or not text.strip() or self.is_pending:
            return False

        history = self.history()
        self._turns.append(ChatTurn(role="user", text=text))
        self.is_pending = True
        try:
            reply = await self.sender(history, text, self.context_file)
        except Exception:
            logger.exception("Chat sender failed")
            reply = CONNECTION_ERROR_TEXT
        finally:
            self.is_pending = False
        self._turns.append(ChatTurn(role="model", text=reply))
        return True
