"""Environment config loader — reads settings into Settings."""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv

from kandidato.schemas.config import Settings

# Env var → Settings field. Earlier deployments used the NEXT_PUBLIC_ names
# for the ad settings; both spellings are accepted, the first found wins.
_ENV_FIELDS: dict[str, tuple[str, ...]] = {
    "openai_api_key": ("OPENAI_API_KEY",),
    "model": ("OPENAI_MODEL",),
    "adsense_client_id": ("ADSENSE_CLIENT_ID", "NEXT_PUBLIC_ADSENSE_CLIENT_ID"),
    "adsense_ad_slot": ("ADSENSE_AD_SLOT", "NEXT_PUBLIC_ADSENSE_AD_SLOT"),
    "adsense_test_mode": ("ADSENSE_TEST_MODE", "NEXT_PUBLIC_ADSENSE_TEST_MODE"),
    "roster_path": ("KANDIDATO_ROSTER_PATH",),
    "max_attempts": ("KANDIDATO_MAX_ATTEMPTS",),
    "dry_run": ("KANDIDATO_DRY_RUN",),
}


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build validated settings from ``env`` (default: ``os.environ``).

    When reading the real environment, a ``.env`` file in the working
    directory is loaded first without overriding existing variables.
    Raises ``pydantic.ValidationError`` for malformed values.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    raw: dict[str, str] = {}
    for field, names in _ENV_FIELDS.items():
        for name in names:
            value = env.get(name)
            if value not in (None, ""):
                raw[field] = value
                break

    return Settings(**raw)
