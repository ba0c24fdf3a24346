import pytest

from app.models.agenda import FilePayload
from app.models.chat import HistoryTurn
from app.services.chat import (
    APOLOGY_TEXT,
    CONTEXT_LEAD_IN,
    EMPTY_REPLY_TEXT,
    SYSTEM_INSTRUCTION,
    ChatError,
    build_chat_messages,
    exchange_chat_message,
    send_chat_message,
)


def _has_file_part(messages):
    parts = messages[-1]["content"]
    return any(p["type"] == "file" for p in parts)


def test_first_turn_attaches_file(pdf_payload):
    messages = build_chat_messages([], "What is this about?", pdf_payload)

    assert messages[0] == {"role": "system", "content": SYSTEM_INSTRUCTION}
    parts = messages[-1]["content"]
    assert parts[0] == {"type": "text", "text": CONTEXT_LEAD_IN}
    assert parts[1]["type"] == "file"
    assert parts[2] == {"type": "text", "text": "What is this about?"}


def test_later_turns_never_reattach_file(pdf_payload):
    history = [
        HistoryTurn(role="user", text="What is this about?"),
        HistoryTurn(role="model", text="A planning brief."),
    ]
    messages = build_chat_messages(history, "Who presents?", pdf_payload)

    assert not _has_file_part(messages)
    assert messages[-1]["content"] == [{"type": "text", "text": "Who presents?"}]


def test_history_resent_with_provider_roles():
    history = [
        HistoryTurn(role="model", text="Hi!"),
        HistoryTurn(role="user", text="Hello"),
        HistoryTurn(role="model", text="How can I help?"),
    ]
    messages = build_chat_messages(history, "Summarize")

    assert [m["role"] for m in messages] == ["system", "assistant", "user", "assistant", "user"]
    assert messages[1]["content"] == "Hi!"


def test_first_turn_without_file_is_text_only():
    messages = build_chat_messages([], "Hello")
    assert messages[-1]["content"] == [{"type": "text", "text": "Hello"}]


@pytest.mark.asyncio
async def test_send_chat_message_returns_reply(fake_client, pdf_payload):
    client = fake_client(content="The meeting covers the Q3 budget.")

    reply = await send_chat_message([], "What is this about?", client, pdf_payload)

    assert reply == "The meeting covers the Q3 budget."
    call = client.completions.calls[0]
    assert _has_file_part(call["messages"])


@pytest.mark.asyncio
async def test_failure_degrades_to_apology(fake_client):
    client = fake_client(error=RuntimeError("boom"))

    result = await exchange_chat_message([], "Hello", client)
    assert not result.ok
    assert isinstance(result.error, ChatError)
    assert result.text is None

    reply = await send_chat_message([], "Hello", client)
    assert reply == APOLOGY_TEXT


@pytest.mark.asyncio
async def test_empty_reply_uses_fallback_text(fake_client):
    client = fake_client(content="")
    reply = await send_chat_message([], "Hello", client)
    assert reply == EMPTY_REPLY_TEXT


@pytest.mark.asyncio
async def test_undecodable_context_file_degrades_to_apology(fake_client):
    bad_file = FilePayload(name="notes.txt", mime_type="text/plain", base64_data="abc")
    client = fake_client(content="unused")

    result = await exchange_chat_message([], "What is this?", client, bad_file)
    assert not result.ok
    assert isinstance(result.error, ChatError)

    reply = await send_chat_message([], "What is this?", client, bad_file)
    assert reply == APOLOGY_TEXT
    assert client.completions.calls == []
