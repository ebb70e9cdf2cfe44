"""Comparison agent — two candidate profiles from a single completion."""

from __future__ import annotations

import logging
from typing import Any

from kandidato.agents.base import BaseAgent
from kandidato.agents.comparison.prompts import build_comparison_prompt
from kandidato.agents.profile.prompts import SYSTEM_MESSAGE
from kandidato.errors import ValidationError
from kandidato.schemas.profile import ComparisonResult

logger = logging.getLogger(__name__)


class ComparisonAgent(BaseAgent):
    """Answers ``CompareCandidates``.

    Comparing a candidate with themself is allowed here; the compare page
    is what refuses it.
    """

    @property
    def name(self) -> str:
        return "Candidate Comparison"

    def get_system_prompt(self) -> str:
        return SYSTEM_MESSAGE

    def parse_output(self, data: Any) -> ComparisonResult:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return ComparisonResult.model_validate(data)

    async def compare(self, candidate_a: str | None, candidate_b: str | None) -> ComparisonResult:
        candidate_a = (candidate_a or "").strip()
        candidate_b = (candidate_b or "").strip()
        if not candidate_a or not candidate_b:
            raise ValidationError("Both candidate names are required.")

        result = await self.run(build_comparison_prompt(candidate_a, candidate_b))
        for profile in result.candidates:
            if missing := profile.missing_issues():
                logger.warning("Profile for %s has no stance on: %s", profile.full_name, ", ".join(missing))
        return result
