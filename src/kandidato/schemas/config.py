"""Settings schema — validated from the process environment."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_ROSTER_PATH = Path(__file__).resolve().parent.parent / "data" / "candidates.yml"


class Settings(BaseModel):
    """Application settings read once at startup.

    A missing ``openai_api_key`` is allowed: completion calls then fail
    authentication and surface as HTTP 500.
    """

    openai_api_key: str = ""
    model: str = "gpt-4o"

    # Advertising
    adsense_client_id: str = ""
    adsense_ad_slot: str = ""
    adsense_test_mode: bool = False

    roster_path: Path = DEFAULT_ROSTER_PATH
    max_attempts: int = Field(3, ge=1, le=5)
    dry_run: bool = False

    @field_validator("adsense_test_mode", "dry_run", mode="before")
    @classmethod
    def parse_flag(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        return v
