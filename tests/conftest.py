"""
Shared fixtures: a stand-in for the OpenAI client and sample agendas.
"""
import base64
import copy
import json
from types import SimpleNamespace

import pytest

from app.models.agenda import Agenda, FilePayload


class FakeCompletions:
    """Records every create() call and replays a canned reply or error."""

    def __init__(self, content=None, error=None, refusal=None):
        self.content = content
        self.error = error
        self.refusal = refusal
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content, refusal=self.refusal)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeLLMClient:
    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


AGENDA_DATA = {
    "title": "Q3 Planning",
    "date": "2024-07-01",
    "overview": "Align on budget and roadmap.",
    "stakeholders": [
        {"name": "Alice", "role": "Product Lead"},
        {"name": "Bob", "role": "Finance"},
    ],
    "items": [
        {
            "id": "1",
            "topic": "Kickoff",
            "durationMinutes": 15,
            "presenter": "Alice",
            "description": "Goals for the quarter.",
        },
        {
            "id": "2",
            "topic": "Budget",
            "durationMinutes": 45,
            "presenter": "",
            "description": "Review spend.",
        },
    ],
}


@pytest.fixture
def fake_client():
    return FakeLLMClient


@pytest.fixture
def agenda_data():
    return copy.deepcopy(AGENDA_DATA)


@pytest.fixture
def agenda_json():
    return json.dumps(AGENDA_DATA)


@pytest.fixture
def agenda():
    return Agenda.model_validate(AGENDA_DATA)


@pytest.fixture
def pdf_payload():
    return FilePayload(
        name="brief.pdf",
        mime_type="application/pdf",
        base64_data=base64.b64encode(b"%PDF-1.4 project brief").decode("ascii"),
    )
