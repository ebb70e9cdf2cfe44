"""Profile agent — one candidate's background, stances, laws and policy focus."""

from __future__ import annotations

import logging
from typing import Any

from kandidato.agents.base import BaseAgent
from kandidato.agents.profile.prompts import SYSTEM_MESSAGE, build_profile_prompt
from kandidato.errors import ValidationError
from kandidato.schemas.profile import CandidateProfile

logger = logging.getLogger(__name__)


class ProfileAgent(BaseAgent):
    """Answers ``GetCandidateProfile``."""

    @property
    def name(self) -> str:
        return "Candidate Profile"

    def get_system_prompt(self) -> str:
        return SYSTEM_MESSAGE

    def parse_output(self, data: Any) -> CandidateProfile:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return CandidateProfile.model_validate(data)

    async def get_profile(self, candidate_name: str | None) -> CandidateProfile:
        candidate_name = (candidate_name or "").strip()
        if not candidate_name:
            raise ValidationError("Candidate name is required.")

        profile = await self.run(build_profile_prompt(candidate_name))
        if missing := profile.missing_issues():
            logger.warning("Profile for %s has no stance on: %s", candidate_name, ", ".join(missing))
        return profile
