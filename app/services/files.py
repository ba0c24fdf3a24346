import base64
import binascii
import logging

from fastapi import UploadFile

from app.core.errors import FileReadError
from app.models.agenda import FilePayload

logger = logging.getLogger("agenda_assistant")

DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_file(content: bytes, name: str, mime_type: str | None) -> FilePayload:
    """
    Encode raw file content as a base64 payload.
    The MIME type is taken as declared by the source, never sniffed.
    """
    if content is None:
        raise FileReadError(f"Could not read '{name}'.")
    if not content:
        raise FileReadError(f"'{name}' is empty.")
    try:
        data = base64.b64encode(content).decode("ascii")
    except (TypeError, binascii.Error) as exc:
        raise FileReadError(f"Could not encode '{name}': {exc}") from exc

    logger.debug("Encoded %s (%s, %d bytes)", name, mime_type, len(content))
    return FilePayload(
        name=name or "document",
        mime_type=mime_type or DEFAULT_MIME_TYPE,
        base64_data=data,
    )


async def read_upload(upload: UploadFile) -> FilePayload:
    try:
        content = await upload.read()
    except OSError as exc:
        raise FileReadError(f"Could not read '{upload.filename}': {exc}") from exc
    return encode_file(content, upload.filename or "document", upload.content_type)
