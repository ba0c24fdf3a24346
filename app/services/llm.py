from functools import lru_cache
from typing import Any, Dict

from fastapi import HTTPException
from openai import AsyncOpenAI

from app.core.config import settings
from app.models.agenda import FilePayload


class LLMConfigError(Exception):
    pass


def _make_openai_client() -> AsyncOpenAI:
    api_key = settings.OPENAI_API_KEY
    if not api_key:
        raise LLMConfigError("OPENAI_API_KEY is missing.")
    return AsyncOpenAI(api_key=api_key, max_retries=settings.LLM_MAX_RETRIES)


@lru_cache(maxsize=1)
def _cached_client() -> AsyncOpenAI:
    return _make_openai_client()


def get_llm_client() -> AsyncOpenAI:
    """FastAPI dependency; overridden in tests."""
    try:
        return _cached_client()
    except LLMConfigError as e:
        raise HTTPException(status_code=503, detail=str(e))


async def close_llm_client() -> None:
    if _cached_client.cache_info().currsize:
        await _cached_client().close()
        _cached_client.cache_clear()


def document_part(payload: FilePayload) -> Dict[str, Any]:
    """
    Content part carrying the whole document.
    images -> image_url, text/* -> inline text, everything else -> file
    """
    mime = payload.mime_type.lower()
    if mime.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": payload.data_url}}
    if mime.startswith("text/"):
        text = payload.to_bytes().decode("utf-8", errors="replace")
        return {"type": "text", "text": f"[{payload.name}]\n{text}"}
    return {
        "type": "file",
        "file": {"filename": payload.name, "file_data": payload.data_url},
    }


def text_part(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}
