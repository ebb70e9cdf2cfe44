"""Prompt template for a two-candidate comparison."""

from kandidato.agents.profile.prompts import (
    ISSUE_LIST,
    LAWS_RULES,
    OUTPUT_RULES,
    PROFILE_SCHEMA,
    SOURCING_RULES,
)

_INDENTED_SCHEMA = "\n".join("    " + line for line in PROFILE_SCHEMA.splitlines())


def build_comparison_prompt(name_a: str, name_b: str) -> str:
    """Render the comparison prompt; one completion answers for both names."""
    return f"""\
You are a political data analyst assistant. Compare the following two Philippine \
senatorial candidates for the 2025 elections using structured JSON covering four \
categories for each candidate:
1. Background
2. Stances on social/political issues
3. Laws and bills authored, co-authored, or sponsored
4. Policy focus

If limited public data exists, summarize known political affiliations and party \
platform. Do not invent accomplishments or legislative history.

Social Issues for Stances (one entry per issue for each candidate, position is \
one of Support, Oppose or Neutral):
{ISSUE_LIST}

{LAWS_RULES}

{SOURCING_RULES}

Return the response in this JSON format, with the candidates in the order given:

{{
  "candidates": [
{_INDENTED_SCHEMA},
    {{ "...": "second candidate, same structure" }}
  ]
}}

{OUTPUT_RULES}

Candidate A: {name_a}
Candidate B: {name_b}
"""
