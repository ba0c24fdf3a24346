import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import FileReadError, GenerationError
from app.models.agenda import Agenda, FileInfo
from app.schemas.agenda import AgendaResponse, ExportFormat
from app.services.agenda import generate_agenda
from app.services.export import generate_pdf_agenda, render_markdown
from app.services.files import read_upload
from app.services.llm import get_llm_client
from app.ui.agenda_view import parse_session_start

logger = logging.getLogger("agenda_assistant")

router = APIRouter(prefix="/agenda", tags=["agenda"])


@router.post("", response_model=AgendaResponse)
async def generate_agenda_endpoint(
    file: UploadFile = File(...),
    client: AsyncOpenAI = Depends(get_llm_client),
):
    """
    Génération de l'agenda à partir d'un document.
    The previous agenda is the caller's to discard; no partial result is returned.
    """
    try:
        payload = await read_upload(file)
    except FileReadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        agenda = await generate_agenda(payload, client)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=f"Agenda generation failed: {e}")

    return AgendaResponse(
        file=FileInfo(name=payload.name, mime_type=payload.mime_type),
        agenda=agenda,
    )


@router.post("/export")
async def export_agenda_endpoint(
    agenda: Agenda,
    format: ExportFormat = Query(default="markdown"),
):
    start = parse_session_start(settings.SESSION_START)
    if format == "pdf":
        content = generate_pdf_agenda(agenda, start=start)
        media_type = "application/pdf"
        filename = "meeting-agenda.pdf"
    else:
        content = render_markdown(agenda, start=start).encode("utf-8")
        media_type = "text/markdown"
        filename = "meeting-agenda.md"

    logger.info("Exported agenda '%s' as %s", agenda.title, format)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
