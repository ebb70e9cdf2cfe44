"""YAML roster loader — reads the static candidate list."""

from __future__ import annotations

from pathlib import Path

import yaml

from kandidato.schemas.roster import RosterEntry


def load_roster(path: str | Path) -> list[RosterEntry]:
    """Load and validate a roster file.

    Raises ``FileNotFoundError`` if the path doesn't exist,
    ``ValueError`` for a non-list document or duplicate ids, and
    ``pydantic.ValidationError`` for malformed entries.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Roster file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"Roster file must be a YAML list, got {type(raw).__name__}")

    entries = [RosterEntry(**item) for item in raw if item]
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise ValueError(f"Duplicate candidate id in roster: {entry.id}")
        seen.add(entry.id)
    return entries


def find_candidate(roster: list[RosterEntry], candidate_id: str) -> RosterEntry | None:
    for entry in roster:
        if entry.id == candidate_id:
            return entry
    return None
