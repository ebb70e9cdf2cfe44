"""Async OpenAI chat-completion wrapper with bounded retry.

The pipeline only ever needs a single system + user exchange, so the
client exposes one method, ``complete``, and keeps retry policy here
rather than in the handlers.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
import re
from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    OpenAIError,
    RateLimitError,
)
from pydantic import BaseModel

from kandidato.errors import NonRetryableUpstreamError, RetriesExhaustedError
from kandidato.schemas.profile import slugify

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"

_DEFAULT_MAX_ATTEMPTS = 3
_DEFAULT_BASE_DELAY = 2.0  # seconds


class CompletionOptions(BaseModel):
    """Sampling parameters sent with every completion request."""

    model: str = DEFAULT_MODEL
    temperature: float = 0.0
    top_p: float = 1.0
    max_tokens: int = 4096


def _parse_retry_after(exc: APIStatusError) -> float | None:
    """Extract the suggested retry delay from a rate limit error.

    Checks the ``Retry-After`` header first, then falls back to parsing
    the "Please try again in Xs / Xms" substring from the error message.
    Returns seconds as a float, or None if not found.
    """
    try:
        headers = exc.response.headers
        if retry_after := headers.get("retry-after"):
            return float(retry_after)
    except (AttributeError, TypeError, ValueError):
        pass

    m = re.search(r"try again in (\d+(?:\.\d+)?)\s*(ms|s)\b", str(exc), re.IGNORECASE)
    if m:
        value = float(m.group(1))
        return value / 1000 if m.group(2).lower() == "ms" else value

    return None


def _is_oversized(exc: RateLimitError) -> bool:
    msg = str(exc).lower()
    return "request too large" in msg or "context_length_exceeded" in msg


class CompletionClient:
    """Thin async wrapper around the OpenAI SDK.

    The SDK's own retries are disabled; ``complete`` makes at most
    ``max_attempts`` calls and raises ``RetriesExhaustedError`` or
    ``NonRetryableUpstreamError`` so callers can tell the two apart.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        max_attempts: int = _DEFAULT_MAX_ATTEMPTS,
        base_delay: float = _DEFAULT_BASE_DELAY,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        # The SDK refuses to construct without a key; an empty one fails
        # authentication on first use instead, which is what we want.
        self._client = AsyncOpenAI(
            api_key=api_key or "missing-api-key",
            max_retries=0,
            http_client=http_client,
        )
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    def _delay_for(self, attempt: int, suggested: float | None = None) -> float:
        backoff = self.base_delay * (2 ** attempt)
        base = max(suggested or 0.0, backoff)
        jitter = random.uniform(-0.25 * base, 0.25 * base)
        return max(0.0, base + jitter)

    async def _call_with_retry(self, **kwargs: Any) -> Any:
        """Call chat.completions.create with exponential backoff.

        Rate limits honour OpenAI's suggested retry-after time when it is
        longer than the backoff. Requests that are too large, and any
        4xx other than 429, fail immediately.
        """
        last_exc: Exception | None = None
        for attempt in range(self.max_attempts):
            try:
                return await self._client.chat.completions.create(**kwargs)
            except RateLimitError as exc:
                if _is_oversized(exc):
                    logger.error("Request exceeds token limit (not retryable): %s", exc)
                    raise NonRetryableUpstreamError(str(exc)) from exc
                last_exc = exc
                suggested = _parse_retry_after(exc)
                kind = "Rate limited (429)"
            except (APIConnectionError, APITimeoutError, InternalServerError) as exc:
                last_exc = exc
                suggested = None
                kind = "Connection error"
            except APIStatusError as exc:
                logger.error("Completion request rejected (%s): %s", exc.status_code, exc)
                raise NonRetryableUpstreamError(str(exc)) from exc
            except OpenAIError as exc:
                logger.error("Completion request failed: %s", exc)
                raise NonRetryableUpstreamError(str(exc)) from exc

            if attempt == self.max_attempts - 1:
                break
            delay = self._delay_for(attempt, suggested)
            logger.warning(
                "%s, retrying in %.1fs (attempt %d/%d): %s",
                kind, delay, attempt + 1, self.max_attempts, last_exc,
            )
            await asyncio.sleep(delay)

        logger.error("Completion failed after %d attempts: %s", self.max_attempts, last_exc)
        raise RetriesExhaustedError(
            f"Completion failed after {self.max_attempts} attempts: {last_exc}",
            attempts=self.max_attempts,
        ) from last_exc

    async def complete(
        self,
        system_message: str,
        user_prompt: str,
        options: CompletionOptions | None = None,
    ) -> str:
        """Single request/response; returns the raw assistant text."""
        options = options or CompletionOptions()
        response = await self._call_with_retry(
            model=options.model,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
            top_p=options.top_p,
            messages=[
                {"role": "system", "content": system_message},
                {"role": "user", "content": user_prompt},
            ],
        )
        usage = getattr(response, "usage", None)
        if usage:
            logger.debug(
                "Completion used %s prompt / %s completion tokens",
                getattr(usage, "prompt_tokens", 0),
                getattr(usage, "completion_tokens", 0),
            )
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


# ======================================================================
# Dry-run mock client — zero API calls
# ======================================================================

_NAME_LINE = re.compile(r"^(?:Candidate Name|Candidate A|Candidate B):\s*(.+)$", re.MULTILINE)


def _canned_profile(name: str) -> dict[str, Any]:
    return {
        "id": slugify(name),
        "fullName": name,
        "party": "Independent",
        "background": {
            "educationalBackground": "Dry-run placeholder",
            "professionalExperience": "Dry-run placeholder",
            "governmentPositionsHeld": "None on record",
            "notableAccomplishments": "None on record",
            "criminalRecords": "None on record",
            "numberOfLawsAndBillsAuthored": "0",
        },
        "stances": [
            {
                "issue": "Federalism",
                "position": "Neutral",
                "justification": "No public statement found.",
                "sources": [{"name": "Dry run", "url": "source URL not found"}],
            }
        ],
        "laws": [],
        "policyFocus": ["Education", "Health"],
    }


class DryRunClient:
    """Drop-in replacement for CompletionClient that makes zero API calls.

    Reads the candidate name lines at the end of the prompt and answers
    with a fenced placeholder profile for each, so the full pipeline
    (including fence-stripping) runs offline.
    """

    async def complete(
        self,
        system_message: str,
        user_prompt: str,
        options: CompletionOptions | None = None,
    ) -> str:
        names = [n.strip() for n in _NAME_LINE.findall(user_prompt)]
        logger.info("[dry-run] Completion for %s", ", ".join(names) or "(no names)")
        if len(names) >= 2:
            payload: dict[str, Any] = {"candidates": [_canned_profile(n) for n in names[:2]]}
        else:
            payload = _canned_profile(names[0] if names else "Unknown Candidate")
        return "```json\n" + json.dumps(payload, indent=2) + "\n```"

    async def aclose(self) -> None:
        return None
