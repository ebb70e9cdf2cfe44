"""Roster schema — the static list of candidates shown on the home page."""

from pydantic import BaseModel, field_validator


class RosterEntry(BaseModel):
    """One candidate in the roster (``GET /api/candidates``)."""

    id: str
    name: str
    party: str = ""
    image: str = ""

    @field_validator("id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()
