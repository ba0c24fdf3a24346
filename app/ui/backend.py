"""HTTP client the Streamlit frontend uses to reach the API."""

from __future__ import annotations

from typing import List, Optional

import httpx

from app.models.agenda import Agenda, FilePayload
from app.models.chat import HistoryTurn
from app.core.errors import GenerationError


class BackendClient:
    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # timeout=None: a hung provider call keeps the request open
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport, timeout=None)

    async def generate_agenda(self, payload: FilePayload) -> Agenda:
        files = {"file": (payload.name, payload.to_bytes(), payload.mime_type)}
        async with self._client() as client:
            res = await client.post("/agenda", files=files)
        if res.status_code != 200:
            try:
                detail = res.json().get("detail")
            except ValueError:
                detail = res.text
            raise GenerationError(f"Backend returned {res.status_code}: {detail}")
        return Agenda.model_validate(res.json()["agenda"])

    async def send_chat_message(
        self,
        history: List[HistoryTurn],
        message: str,
        context_file: Optional[FilePayload] = None,
    ) -> str:
        body = {
            "history": [turn.model_dump() for turn in history],
            "message": message,
            "file": context_file.model_dump(by_alias=True) if context_file else None,
        }
        async with self._client() as client:
            res = await client.post("/chat", json=body)
            res.raise_for_status()
        return res.json()["reply"]

    async def export_agenda(self, agenda: Agenda, format: str = "markdown") -> bytes:
        async with self._client() as client:
            res = await client.post(
                "/agenda/export",
                params={"format": format},
                json=agenda.model_dump(mode="json", by_alias=True),
            )
            res.raise_for_status()
        return res.content
