"""Base agent ABC — prompt → completion → normalize → validate."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kandidato.errors import ParseError, SchemaError
from kandidato.shared.completion_client import CompletionOptions
from kandidato.shared.normalizer import normalize

logger = logging.getLogger(__name__)


class Completer(Protocol):
    """Anything with the ``CompletionClient.complete`` signature."""

    async def complete(
        self,
        system_message: str,
        user_prompt: str,
        options: CompletionOptions | None = None,
    ) -> str: ...


class BaseAgent(ABC):
    """Abstract base class for the request handlers.

    Subclasses implement:
    - ``name`` — human-readable agent name for logs
    - ``get_system_prompt()`` — returns the system message
    - ``parse_output(data)`` — validates parsed JSON into a Pydantic model
    """

    def __init__(self, client: Completer, options: CompletionOptions | None = None) -> None:
        self.client = client
        self.options = options or CompletionOptions()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for log lines."""

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Return the system message for this agent."""

    @abstractmethod
    def parse_output(self, data: Any) -> BaseModel:
        """Validate the normalized JSON into the output model."""

    async def run(self, user_prompt: str) -> BaseModel:
        """Send the prompt and return the validated output model.

        Upstream failures propagate as ``UpstreamError``, non-JSON text as
        ``ParseError`` and shape mismatches as ``SchemaError``. Nothing is
        retried at this level.
        """
        raw = await self.client.complete(self.get_system_prompt(), user_prompt, self.options)
        logger.debug("Agent %s raw output:\n%s", self.name, raw[:500])

        try:
            data = normalize(raw)
        except ParseError:
            logger.warning("Agent %s output was not valid JSON", self.name)
            raise

        try:
            return self.parse_output(data)
        except (PydanticValidationError, TypeError) as exc:
            logger.warning("Agent %s output did not match the schema: %s", self.name, exc)
            raise SchemaError(f"{self.name} output did not match the schema: {exc}") from exc
