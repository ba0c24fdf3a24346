import asyncio

import pytest

from app.ui.chat_panel import (
    CLOSED,
    CONNECTION_ERROR_TEXT,
    GREETING,
    OPEN_IDLE,
    OPEN_PENDING,
    ChatPanel,
)


class RecordingSender:
    def __init__(self, reply="Sure."):
        self.reply = reply
        self.calls = []

    async def __call__(self, history, message, context_file):
        self.calls.append((list(history), message, context_file))
        return self.reply


def test_initial_state_closed_with_greeting():
    panel = ChatPanel(sender=RecordingSender())

    assert panel.state == CLOSED
    assert len(panel.transcript) == 1
    assert panel.transcript[0].role == "model"
    assert panel.transcript[0].text == GREETING


def test_toggle_keeps_transcript():
    panel = ChatPanel(sender=RecordingSender())

    panel.open()
    assert panel.state == OPEN_IDLE
    panel.close()
    assert panel.state == CLOSED
    panel.toggle()
    assert panel.state == OPEN_IDLE
    assert len(panel.transcript) == 1


@pytest.mark.asyncio
async def test_submit_appends_user_and_model_turns():
    sender = RecordingSender(reply="The budget item takes 45 minutes.")
    panel = ChatPanel(sender=sender)
    panel.open()

    accepted = await panel.submit("How long is the budget item?")

    assert accepted
    assert [t.role for t in panel.transcript] == ["model", "user", "model"]
    assert panel.transcript[-1].text == "The budget item takes 45 minutes."
    assert panel.state == OPEN_IDLE


@pytest.mark.asyncio
async def test_sender_gets_transcript_before_new_message(pdf_payload):
    sender = RecordingSender()
    panel = ChatPanel(sender=sender)
    panel.context_file = pdf_payload

    await panel.submit("First question")
    await panel.submit("Second question")

    history, message, context_file = sender.calls[0]
    assert [(h.role, h.text) for h in history] == [("model", GREETING)]
    assert message == "First question"
    assert context_file is pdf_payload

    history, message, _ = sender.calls[1]
    assert [h.role for h in history] == ["model", "user", "model"]
    assert message == "Second question"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_message_is_noop(text):
    sender = RecordingSender()
    panel = ChatPanel(sender=sender)

    accepted = await panel.submit(text)

    assert not accepted
    assert len(panel.transcript) == 1
    assert sender.calls == []


@pytest.mark.asyncio
async def test_submit_while_pending_is_rejected():
    release = asyncio.Event()

    async def slow_sender(history, message, context_file):
        await release.wait()
        return "done"

    panel = ChatPanel(sender=slow_sender)
    panel.open()

    first = asyncio.create_task(panel.submit("one"))
    await asyncio.sleep(0)
    assert panel.state == OPEN_PENDING
    assert [t.role for t in panel.transcript] == ["model", "user"]

    assert await panel.submit("two") is False
    assert len(panel.transcript) == 2

    release.set()
    assert await first is True
    assert [t.text for t in panel.transcript] == [GREETING, "one", "done"]
    assert panel.state == OPEN_IDLE


@pytest.mark.asyncio
async def test_sender_failure_appends_connection_error():
    async def broken_sender(history, message, context_file):
        raise ConnectionError("backend down")

    panel = ChatPanel(sender=broken_sender)

    assert await panel.submit("Hello?")
    assert panel.transcript[-1].role == "model"
    assert panel.transcript[-1].text == CONNECTION_ERROR_TEXT
    assert not panel.is_pending


def test_transcript_is_a_copy():
    panel = ChatPanel(sender=RecordingSender())
    panel.transcript.clear()
    assert len(panel.transcript) == 1
