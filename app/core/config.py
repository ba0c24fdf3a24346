"""
Application configuration using Pydantic Settings.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API Keys
    OPENAI_API_KEY: Optional[str] = None

    # LLM Configuration
    AGENDA_MODEL: str = "gpt-4o-mini"
    CHAT_MODEL: str = "gpt-4o"
    AGENDA_TEMPERATURE: float = 0.2
    LLM_MAX_RETRIES: int = 0

    # Agenda
    SESSION_START: str = "09:00"  # HH:MM, local time of the current day

    # Application
    PROJECT_NAME: str = "Agenda Assistant"
    PROJECT_DESCRIPTION: str = "Turn documents into structured meeting agendas and chat about them."
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:8501"]
    API_URL: str = "http://localhost:8000"

    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    @property
    def llm_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)


settings = Settings()
