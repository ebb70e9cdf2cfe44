"""Pydantic models for candidate profiles returned by the completion service."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

SOURCE_NOT_FOUND = "source URL not found"

# Earlier prompt revisions asked for these; fold them into the one sentinel.
_LEGACY_SENTINELS = {"source not found", "source url not found", "no verifiable record found"}

ISSUES: tuple[str, ...] = (
    "Same-sex Marriage",
    "Death Penalty",
    "Legalization of Abortion",
    "Divorce",
    "Banning of Political Dynasty",
    "Legalization of Medical Marijuana",
    "Federalism",
    "War on Drugs",
    "SOGIE Bill",
)


def slugify(name: str) -> str:
    """Lowercase, hyphenated ASCII identifier for a display name."""
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", folded.lower()).strip("-")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Source(_WireModel):
    """A citation; ``url`` is a real link or ``SOURCE_NOT_FOUND``."""

    name: str = ""
    url: str = SOURCE_NOT_FOUND

    @field_validator("url", mode="before")
    @classmethod
    def canonical_sentinel(cls, v: object) -> str:
        text = str(v or "").strip()
        if not text or text.lower() in _LEGACY_SENTINELS:
            return SOURCE_NOT_FOUND
        return text

    @property
    def is_verifiable(self) -> bool:
        return self.url.startswith(("http://", "https://"))


class Background(_WireModel):
    educational_background: str = Field("", alias="educationalBackground")
    professional_experience: str = Field("", alias="professionalExperience")
    government_positions_held: str = Field("", alias="governmentPositionsHeld")
    notable_accomplishments: str = Field("", alias="notableAccomplishments")
    criminal_records: str = Field("", alias="criminalRecords")
    number_of_laws_and_bills_authored: str = Field("", alias="numberOfLawsAndBillsAuthored")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_str(cls, v: object) -> object:
        """Models sometimes answer with a count or a list instead of prose."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return "; ".join(str(item) for item in v if item is not None)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Stance(_WireModel):
    issue: str
    position: Literal["Support", "Oppose", "Neutral"]
    justification: str = ""
    sources: list[Source] = []

    @field_validator("position", mode="before")
    @classmethod
    def normalize_position(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().capitalize()
        return v


class Law(_WireModel):
    title: str
    role: str = ""
    summary: str = ""
    status: str = ""
    bill_number: str | None = Field(None, alias="billNumber")
    sources: list[Source] = []

    @model_validator(mode="before")
    @classmethod
    def accept_number_key(cls, data: object) -> object:
        """The first profile prompt called the bill number ``number``."""
        if isinstance(data, dict) and "billNumber" not in data and data.get("number"):
            data = {**data, "billNumber": str(data["number"])}
            data.pop("number")
        return data


class _Payload(_WireModel):
    """Keeps the JSON object a model was validated from.

    ``to_wire`` hands that object back untouched, so callers see exactly
    what the completion service produced (extra keys, nulls and all); the
    validated fields are for rendering.
    """

    _payload: dict | None = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def keep_payload(cls, data: Any, handler: Any) -> Any:
        model = handler(data)
        if isinstance(data, dict):
            model._payload = data
        return model

    def to_wire(self) -> dict:
        if self._payload is not None:
            return self._payload
        return self.model_dump(by_alias=True, exclude_none=True)


class CandidateProfile(_Payload):
    """Full profile for one candidate."""

    id: str = ""
    full_name: str = Field("", alias="fullName")
    party: str = ""
    age: int | str | None = None
    senator_bio_link: str | None = Field(None, alias="senatorBioLink")
    background: Background
    stances: list[Stance]
    laws: list[Law]
    policy_focus: list[str] = Field(alias="policyFocus")

    @field_validator("full_name", "party", mode="before")
    @classmethod
    def none_is_blank(cls, v: object) -> object:
        return "" if v is None else v

    @model_validator(mode="after")
    def derive_id(self) -> "CandidateProfile":
        if not self.id.strip() and self.full_name.strip():
            self.id = slugify(self.full_name)
        return self

    def missing_issues(self) -> list[str]:
        """Fixed issues the model did not report a stance on."""
        covered = {s.issue.strip().lower() for s in self.stances}
        return [issue for issue in ISSUES if issue.lower() not in covered]


class ComparisonResult(_Payload):
    """Two independent profiles, in request order."""

    candidates: list[CandidateProfile] = Field(min_length=2, max_length=2)
