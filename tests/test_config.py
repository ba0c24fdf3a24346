from app.core.config import Settings
from app.ui.agenda_view import DEFAULT_SESSION_START, parse_session_start


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    cfg = Settings(_env_file=None)

    assert cfg.OPENAI_API_KEY is None
    assert not cfg.llm_configured
    assert cfg.LLM_MAX_RETRIES == 0
    assert parse_session_start(cfg.SESSION_START) == DEFAULT_SESSION_START


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("chat_model", "gpt-4o-mini")
    monkeypatch.setenv("SESSION_START", "10:30")

    cfg = Settings(_env_file=None)

    assert cfg.llm_configured
    assert cfg.CHAT_MODEL == "gpt-4o-mini"
    assert cfg.SESSION_START == "10:30"
