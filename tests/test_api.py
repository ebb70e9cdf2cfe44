"""Tests for the JSON API routes, including end-to-end runs over a stub transport."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from kandidato.errors import RetriesExhaustedError
from kandidato.schemas.config import Settings
from kandidato.shared.completion_client import CompletionClient
from kandidato.web.app import create_app

from conftest import fenced


def _chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _stubbed_completion_client(handler) -> CompletionClient:
    """A real CompletionClient whose HTTP calls go to ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CompletionClient("sk-test", base_delay=0.0, http_client=http_client)


@pytest.fixture
def api(settings: Settings, fake_client: AsyncMock) -> TestClient:
    return TestClient(create_app(settings, client=fake_client))


class TestGetCandidateData:
    def test_success(self, api: TestClient, sample_profile: dict) -> None:
        res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})
        assert res.status_code == 200
        assert res.json() == sample_profile

    @pytest.mark.parametrize("body", [{}, {"candidateName": ""}, {"candidateName": "   "}, {"candidateName": None}])
    def test_missing_name_is_400_without_upstream_call(
        self, api: TestClient, fake_client: AsyncMock, body: dict,
    ) -> None:
        res = api.post("/api/getCandidateData", json=body)
        assert res.status_code == 400
        assert res.json() == {"error": "Candidate name is required."}
        fake_client.complete.assert_not_awaited()

    def test_malformed_body_is_400(self, api: TestClient, fake_client: AsyncMock) -> None:
        res = api.post(
            "/api/getCandidateData",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert res.status_code == 400
        assert "error" in res.json()
        fake_client.complete.assert_not_awaited()

    def test_upstream_failure_is_generic_500(self, api: TestClient, fake_client: AsyncMock) -> None:
        fake_client.complete.side_effect = RetriesExhaustedError("429 x3", attempts=3)
        res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch response from OpenAI."}

    def test_parse_failure_is_generic_500(self, api: TestClient, fake_client: AsyncMock) -> None:
        fake_client.complete.return_value = "Sorry, I can't help with that."
        res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch response from OpenAI."}

    def test_schema_failure_is_500(self, api: TestClient, fake_client: AsyncMock) -> None:
        fake_client.complete.return_value = fenced({"fullName": "Juan"})
        res = api.post("/api/getCandidateData", json={"candidateName": "Juan"})
        assert res.status_code == 500
        assert set(res.json()) == {"error"}

    def test_profile_without_party_or_name_is_200(
        self, api: TestClient, fake_client: AsyncMock, sample_profile: dict,
    ) -> None:
        del sample_profile["party"], sample_profile["fullName"]
        fake_client.complete.return_value = fenced(sample_profile)
        res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})
        assert res.status_code == 200
        assert res.json() == sample_profile

    def test_body_is_returned_verbatim(self, api: TestClient, fake_client: AsyncMock, sample_profile: dict) -> None:
        sample_profile["senatorBioLink"] = None
        sample_profile["background"]["governmentPositionsHeld"] = ["Senator (2013-2019)", "Mayor"]
        sample_profile["laws"] = [
            {"title": "RA 1", "number": "SB 1", "link": "https://legacy.senate.gov.ph/x", "sources": []}
        ]
        fake_client.complete.return_value = fenced(sample_profile)

        res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})

        assert res.status_code == 200
        assert res.json() == sample_profile

    def test_numeric_name_is_used_as_text(self, api: TestClient, fake_client: AsyncMock) -> None:
        res = api.post("/api/getCandidateData", json={"candidateName": 123})
        assert res.status_code == 200
        assert "Candidate Name: 123" in fake_client.complete.await_args.args[1]


class TestCompareCandidates:
    def test_success(self, api: TestClient, fake_client: AsyncMock, sample_profile: dict) -> None:
        second = {**sample_profile, "id": "maria-santos", "fullName": "Maria Santos"}
        fake_client.complete.return_value = fenced({"candidates": [sample_profile, second]})

        res = api.post("/api/compareCandidates", json={"candidateA": "Juan Dela Cruz", "candidateB": "Maria Santos"})

        assert res.status_code == 200
        assert res.json() == {"candidates": [sample_profile, second]}

    def test_extra_keys_survive(self, api: TestClient, fake_client: AsyncMock, sample_profile: dict) -> None:
        body = {"candidates": [{**sample_profile, "age": None}, {**sample_profile, "slogan": "x"}], "note": "ok"}
        fake_client.complete.return_value = fenced(body)
        res = api.post("/api/compareCandidates", json={"candidateA": "A", "candidateB": "B"})
        assert res.json() == body

    def test_same_candidate_still_200(self, api: TestClient, fake_client: AsyncMock, sample_profile: dict) -> None:
        fake_client.complete.return_value = fenced({"candidates": [sample_profile, sample_profile]})
        res = api.post("/api/compareCandidates", json={"candidateA": "X", "candidateB": "X"})
        assert res.status_code == 200

    @pytest.mark.parametrize("body", [{}, {"candidateA": "X"}, {"candidateB": "Y"}, {"candidateA": "", "candidateB": "Y"}])
    def test_missing_names_400(self, api: TestClient, fake_client: AsyncMock, body: dict) -> None:
        res = api.post("/api/compareCandidates", json=body)
        assert res.status_code == 400
        assert res.json() == {"error": "Both candidate names are required."}
        fake_client.complete.assert_not_awaited()


class TestRoster:
    def test_candidates(self, api: TestClient) -> None:
        res = api.get("/api/candidates")
        assert res.status_code == 200
        assert res.json() == [
            {"id": "juan-dela-cruz", "name": "Juan Dela Cruz", "party": "Independent", "image": ""},
            {"id": "maria-santos", "name": "Maria Santos", "party": "Liberal Party", "image": "/static/maria.jpg"},
        ]

    def test_health(self, api: TestClient) -> None:
        assert api.get("/api/health").json() == {"status": "ok"}


class TestEndToEnd:
    """Real CompletionClient and OpenAI SDK against a stub HTTP transport."""

    def test_fenced_completion_is_unwrapped(self, settings: Settings) -> None:
        body = {
            "id": "juan-dela-cruz",
            "fullName": "Juan Dela Cruz",
            "party": "Independent",
            "background": {
                "educationalBackground": "Law",
                "professionalExperience": "Lawyer",
                "governmentPositionsHeld": "None",
                "notableAccomplishments": "None",
                "criminalRecords": "None",
                "numberOfLawsAndBillsAuthored": "0",
            },
            "stances": [],
            "laws": [],
            "policyFocus": [],
        }
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=_chat_completion("```json\n" + json.dumps(body) + "\n```"))

        client = _stubbed_completion_client(handler)
        with TestClient(create_app(settings, client=client)) as api:
            res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})

        assert res.status_code == 200
        assert res.json() == body
        assert len(seen) == 1
        assert seen[0]["temperature"] == 0
        assert [m["role"] for m in seen[0]["messages"]] == ["system", "user"]

    def test_rate_limited_upstream_is_500(self, settings: Settings) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(
                429,
                json={"error": {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}},
            )

        client = _stubbed_completion_client(handler)
        with TestClient(create_app(settings, client=client)) as api:
            res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})

        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch response from OpenAI."}
        assert calls == client.max_attempts

    def test_bad_api_key_is_500_without_retry(self, settings: Settings) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

        client = _stubbed_completion_client(handler)
        with TestClient(create_app(settings, client=client)) as api:
            res = api.post("/api/getCandidateData", json={"candidateName": "Juan Dela Cruz"})

        assert res.status_code == 500
        assert calls == 1
