from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.models.agenda import Agenda, FileInfo, FilePayload
from app.models.chat import HistoryTurn


class AgendaResponse(BaseModel):
    file: FileInfo
    agenda: Agenda


ExportFormat = Literal["markdown", "pdf"]


class ChatRequest(BaseModel):
    history: List[HistoryTurn] = Field(default_factory=list)
    message: str
    file: Optional[FilePayload] = None


class ChatResponse(BaseModel):
    reply: str
