"""JSON API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from kandidato.agents.comparison.agent import ComparisonAgent
from kandidato.agents.profile.agent import ProfileAgent
from kandidato.schemas.roster import RosterEntry

router = APIRouter(prefix="/api", tags=["api"])


def _scalar_to_str(v: object) -> object:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class ProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_name: str | None = Field(None, alias="candidateName")

    @field_validator("candidate_name", mode="before")
    @classmethod
    def coerce_name(cls, v: object) -> object:
        return _scalar_to_str(v)


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_a: str | None = Field(None, alias="candidateA")
    candidate_b: str | None = Field(None, alias="candidateB")

    @field_validator("candidate_a", "candidate_b", mode="before")
    @classmethod
    def coerce_names(cls, v: object) -> object:
        return _scalar_to_str(v)


def get_profile_agent(request: Request) -> ProfileAgent:
    return request.app.state.profile_agent


def get_comparison_agent(request: Request) -> ComparisonAgent:
    return request.app.state.comparison_agent


def get_roster(request: Request) -> list[RosterEntry]:
    return request.app.state.roster


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/candidates")
async def list_candidates(roster: list[RosterEntry] = Depends(get_roster)) -> list[dict]:
    return [entry.model_dump() for entry in roster]


@router.post("/getCandidateData")
async def get_candidate_data(
    payload: ProfileRequest,
    agent: ProfileAgent = Depends(get_profile_agent),
) -> dict:
    """Profile for ``candidateName``; errors become ``{"error": ...}``."""
    profile = await agent.get_profile(payload.candidate_name)
    return profile.to_wire()


@router.post("/compareCandidates")
async def compare_candidates(
    payload: CompareRequest,
    agent: ComparisonAgent = Depends(get_comparison_agent),
) -> dict:
    result = await agent.compare(payload.candidate_a, payload.candidate_b)
    return result.to_wire()
