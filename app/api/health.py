from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "version": settings.VERSION,
        "llm_configured": settings.llm_configured,
    }
