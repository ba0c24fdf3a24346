import base64
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilePayload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    mime_type: str = Field(..., alias="mimeType")
    base64_data: str = Field(..., alias="base64Data")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64_data)


class Stakeholder(BaseModel):
    name: str
    role: str


class AgendaItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    topic: str
    duration_minutes: int = Field(..., gt=0, alias="durationMinutes")
    presenter: str = ""  # vide -> "Unassigned" à l'affichage
    description: str = ""


class Agenda(BaseModel):
    title: str
    date: Optional[str] = None
    overview: str
    stakeholders: List[Stakeholder]
    items: List[AgendaItem]


class FileInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    mime_type: str = Field(..., alias="mimeType")
