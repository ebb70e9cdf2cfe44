"""Error taxonomy shared by the completion pipeline and the HTTP layer."""

from __future__ import annotations

GENERIC_UPSTREAM_MESSAGE = "Failed to fetch response from OpenAI."


class KandidatoError(Exception):
    """Base class for errors that map onto an HTTP ``{"error": ...}`` body.

    ``public_message`` is what the caller sees; ``str(exc)`` keeps the
    diagnostic detail for the logs.
    """

    status_code = 500
    public_message = GENERIC_UPSTREAM_MESSAGE

    def __init__(self, message: str = "", *, public_message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        if public_message is not None:
            self.public_message = public_message


class ValidationError(KandidatoError):
    """Required candidate name(s) missing from the request."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class UpstreamError(KandidatoError):
    """The completion service call failed (network, auth, rate limit)."""


class RetriesExhaustedError(UpstreamError):
    """Every attempt failed with a retryable error."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class NonRetryableUpstreamError(UpstreamError):
    """The service rejected the request in a way retrying cannot fix."""


class ParseError(KandidatoError):
    """Completion text was not valid JSON after fence-stripping."""


class SchemaError(KandidatoError):
    """Parsed JSON did not match the candidate profile schema."""
