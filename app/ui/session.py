"""Page-level agenda state: current file, agenda, processing flag, banner."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from app.models.agenda import Agenda, FilePayload

logger = logging.getLogger("agenda_assistant")

GENERATION_FAILED_MESSAGE = "Failed to generate agenda. Please try again with a different file."

AgendaGenerator = Callable[[FilePayload], Awaitable[Agenda]]


class AgendaSession:
    def __init__(self) -> None:
        self.file: Optional[FilePayload] = None
        self.agenda: Optional[Agenda] = None
        self.error: Optional[str] = None
        self.is_processing = False

    async def upload(self, payload: FilePayload, generator: AgendaGenerator) -> bool:
        if self.is_processing:
            return False

        self.file = payload
        self.is_processing = True
        self.error = None
        self.agenda = None
        try:
            self.agenda = await generator(payload)
        except Exception:
            logger.exception("Agenda generation failed for %s", payload.name)
            self.error = GENERATION_FAILED_MESSAGE
        finally:
            self.is_processing = False
        return True

    def fail(self, message: str = GENERATION_FAILED_MESSAGE) -> None:
        self.agenda = None
        self.error = message
