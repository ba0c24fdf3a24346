import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.agenda import router as agenda_router
from app.api.chat import router as chat_router
from app.api.health import router as health_router
from app.core.config import settings
from app.core.logging_utils import setup_logging
from typing import AsyncGenerator
from app.services.llm import close_llm_client
from contextlib import asynccontextmanager

logger = setup_logging(level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY is not set; agenda and chat requests will fail with 503.")
    yield
    await close_llm_client()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["system"])
app.include_router(agenda_router)
app.include_router(chat_router)

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
