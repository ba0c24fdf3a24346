import binascii
import logging
from typing import Any, Dict

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import GenerationError
from app.models.agenda import Agenda, FilePayload
from app.services.llm import document_part, text_part

logger = logging.getLogger("agenda_assistant")


#PROMPT
_AGENDA_INSTRUCTION = """Analyze this document and create a comprehensive meeting agenda.
Identify key stakeholders mentioned or implied.
Break down the meeting into logical agenda items with estimated duration in minutes.
If no duration is explicit, estimate based on complexity.
Return the result in strict JSON format matching the schema."""

_STAKEHOLDER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "role": {"type": "string"},
    },
    "required": ["name", "role"],
    "additionalProperties": False,
}

_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "topic": {"type": "string"},
        "durationMinutes": {"type": "integer"},
        "presenter": {"type": "string"},
        "description": {"type": "string"},
    },
    "required": ["id", "topic", "durationMinutes", "presenter", "description"],
    "additionalProperties": False,
}

# strict mode: every property is required, "optional" date is nullable instead
AGENDA_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Title of the meeting"},
        "date": {
            "type": ["string", "null"],
            "description": "Proposed date string if mentioned, else null",
        },
        "overview": {"type": "string", "description": "A brief summary of the meeting goals"},
        "stakeholders": {"type": "array", "items": _STAKEHOLDER_SCHEMA},
        "items": {"type": "array", "items": _ITEM_SCHEMA},
    },
    "required": ["title", "date", "overview", "stakeholders", "items"],
    "additionalProperties": False,
}


def build_agenda_request(payload: FilePayload) -> Dict[str, Any]:
    return {
        "model": settings.AGENDA_MODEL,
        "messages": [
            {
                "role": "user",
                "content": [document_part(payload), text_part(_AGENDA_INSTRUCTION)],
            },
        ],
        "temperature": settings.AGENDA_TEMPERATURE,
        "response_format": {
            "type": "json_schema",
            "json_schema": {"name": "meeting_agenda", "schema": AGENDA_SCHEMA, "strict": True},
        },
    }


def parse_agenda(text: str | None) -> Agenda:
    if not text:
        raise GenerationError("No response text generated")
    try:
        return Agenda.model_validate_json(text)
    except ValidationError as e:
        raise GenerationError(f"Model reply does not match the agenda schema: {e}") from e


async def generate_agenda(payload: FilePayload, client: AsyncOpenAI) -> Agenda:
    if not payload.base64_data:
        raise GenerationError("File payload is empty.")

    logger.info("Generating agenda from %s (%s)", payload.name, payload.mime_type)
    try:
        request = build_agenda_request(payload)
    except binascii.Error as e:
        raise GenerationError(f"File content is not valid base64: {e}") from e
    try:
        completion = await client.chat.completions.create(**request)
    except OpenAIError as e:
        logger.exception("Agenda generation failed for %s", payload.name)
        raise GenerationError(f"Agenda generation failed: {e}") from e

    if not completion.choices:
        raise GenerationError("No response text generated")
    message = completion.choices[0].message
    if getattr(message, "refusal", None):
        raise GenerationError(f"Model refused: {message.refusal}")

    try:
        agenda = parse_agenda(message.content)
    except GenerationError:
        logger.warning("Unusable agenda reply for %s", payload.name)
        raise
    logger.info("Agenda '%s' with %d items", agenda.title, len(agenda.items))
    return agenda
