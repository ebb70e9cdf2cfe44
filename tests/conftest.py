"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from kandidato.schemas.config import Settings
from kandidato.shared.completion_client import CompletionClient

SAMPLE_PROFILE = {
    "id": "juan-dela-cruz",
    "fullName": "Juan Dela Cruz",
    "party": "Independent",
    "background": {
        "educationalBackground": "BA Political Science, University of the Philippines",
        "professionalExperience": "Lawyer",
        "governmentPositionsHeld": "Municipal councilor",
        "notableAccomplishments": "Led a barangay literacy drive",
        "criminalRecords": "None",
        "numberOfLawsAndBillsAuthored": "3",
    },
    "stances": [],
    "laws": [],
    "policyFocus": [],
}


def make_completion_response(text: str | None) -> SimpleNamespace:
    """Build a fake OpenAI chat completion with the given text content."""
    message = SimpleNamespace(content=text, tool_calls=None)
    choice = SimpleNamespace(message=message)
    return SimpleNamespace(choices=[choice], usage=None)


def fenced(data: dict) -> str:
    return "```json\n" + json.dumps(data) + "\n```"


@pytest.fixture
def sample_profile() -> dict:
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def mock_completion_client() -> CompletionClient:
    """Return a CompletionClient with a mocked OpenAI SDK underneath."""
    client = CompletionClient.__new__(CompletionClient)
    client._client = AsyncMock()
    client.max_attempts = 3
    client.base_delay = 0.0
    return client


@pytest.fixture
def roster_file(tmp_path: Path) -> Path:
    path = tmp_path / "candidates.yml"
    path.write_text(
        """\
- id: juan-dela-cruz
  name: Juan Dela Cruz
  party: Independent
- id: maria-santos
  name: Maria Santos
  party: Liberal Party
  image: /static/maria.jpg
"""
    )
    return path


@pytest.fixture
def settings(roster_file: Path) -> Settings:
    return Settings(openai_api_key="sk-test", roster_path=roster_file)


@pytest.fixture
def fake_client() -> AsyncMock:
    """A stand-in completer; set ``complete.return_value`` per test."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=fenced(SAMPLE_PROFILE))
    return client
