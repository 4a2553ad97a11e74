"""
Score analyst service.

Validates an insight request, builds the prompt and hands it to a text
model. It's framework-agnostic and doesn't know about HTTP or which
LLM provider sits behind the TextModelClient protocol.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from .intent import classify_question
from .models import InsightRequest
from .prompts import SYSTEM_PROMPT, assemble_prompt


logger = logging.getLogger(__name__)


class InsightRequestError(ValueError):
    """Raised when the request is missing its question or rounds."""
    pass


class InsightGenerationError(Exception):
    """
    Raised when the text model can't produce an answer.

    Client implementations raise this (or a subclass) for provider and
    transport failures. The message is for logs, not for end users.
    """
    pass


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class TextModelClient(Protocol):
    """
    Interface for text-generation LLM clients.

    The analyst only needs something that takes a prompt and a system
    instruction and returns text. Tests pass an AsyncMock.
    """

    async def generate(self, prompt: str, system_prompt: str) -> str:
        """Return the model's text for a prompt."""
        ...


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

def parse_insight_request(payload: Any) -> InsightRequest:
    """
    Validate a request body and return an InsightRequest.

    The question is checked first; `rounds` is only looked at once the
    question is known to be good.
    """
    if not isinstance(payload, Mapping):
        raise InsightRequestError("Request body must be a JSON object")

    question = payload.get("prompt")
    if not isinstance(question, str) or not question:
        raise InsightRequestError("'prompt' must be a non-empty string")

    rounds = payload.get("rounds")
    if not isinstance(rounds, list):
        raise InsightRequestError("'rounds' must be an array")

    return InsightRequest(question=question, rounds=list(rounds))


# ---------------------------------------------------------------------------
# Analyst Service
# ---------------------------------------------------------------------------

class ScoreAnalyst:
    """
    Answers questions about a player's rounds.

    Stateless beyond its client: every call builds its prompt from the
    request alone, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        text_client: TextModelClient,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._text_client = text_client
        self._system_prompt = system_prompt

    def build_prompt(self, request: InsightRequest) -> str:
        rule = classify_question(request.question)

        logger.info(
            "Building insight prompt",
            extra={
                "intent": rule.intent.value,
                "round_count": len(request.rounds),
                "question_length": len(request.question),
            }
        )

        return assemble_prompt(request.question, rule, request.rounds)

    async def answer(self, request: InsightRequest) -> str:
        """
        Build the prompt and return the model's text unchanged.

        Client failures propagate as InsightGenerationError. Nothing
        is retried here.
        """
        prompt = self.build_prompt(request)

        return await self._text_client.generate(
            prompt=prompt,
            system_prompt=self._system_prompt,
        )
