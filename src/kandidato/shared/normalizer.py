"""Strip markdown fences from completion text and parse it as JSON."""

from __future__ import annotations

import json
import re
from typing import Any

from kandidato.errors import ParseError

_LEADING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```$")


def strip_fences(raw: str) -> str:
    """Remove one leading ```/```json fence and one trailing ``` fence."""
    text = raw.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def normalize(raw: str) -> Any:
    """Parse completion text as JSON after fence-stripping.

    Prose before or after the JSON body is not tolerated: the prompts
    forbid it, so its presence means the answer can't be trusted.
    """
    text = strip_fences(raw or "")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Completion was not valid JSON ({exc.msg} at char {exc.pos}, "
            f"length={len(text)}). First 300 chars: {text[:300]!r}"
        ) from exc
