"""
Anthropic Claude API client wrapper.

This module provides a thin wrapper around the Anthropic SDK that:
1. Implements our TextModelClient protocol
2. Handles API-specific details (message format, text extraction)
3. Provides consistent error handling
4. Enables easy mocking for tests

The wrapper is intentionally thin. It sends one prompt per call and
never retries; retry policy is left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import anthropic
from anthropic import APIError, RateLimitError

from src.core.insights.analyst import InsightGenerationError, TextModelClient


logger = logging.getLogger(__name__)


class AnthropicClientError(InsightGenerationError):
    """Raised when API calls fail."""
    pass


class RateLimitExceeded(AnthropicClientError):
    """Raised when we hit rate limits."""
    pass


@dataclass
class AnthropicConfig:
    """
    Configuration for the Anthropic client.

    Defaults favour short, repeatable answers: a low temperature and a
    small output budget.
    """
    api_key: str
    model: str = "claude-haiku-4-5"
    max_tokens: int = 250
    temperature: float = 0.1

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("API key is required")
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be positive")
        if not 0 <= self.temperature <= 1:
            raise ValueError("temperature must be between 0 and 1")


class AnthropicTextClient(TextModelClient):
    """
    Implementation of TextModelClient using Claude.

    This class knows about Anthropic's API format but doesn't know
    about disc golf. It sends text, gets text back.
    """

    def __init__(
        self,
        config: AnthropicConfig,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ) -> None:
        self._config = config
        self._client = client or anthropic.AsyncAnthropic(
            api_key=config.api_key,
            max_retries=0,
        )

    @property
    def config(self) -> AnthropicConfig:
        return self._config

    async def generate(self, prompt: str, system_prompt: str) -> str:
        """Send a single user prompt to Claude and return its text."""
        if not prompt:
            raise ValueError("Prompt is required")

        try:
            response = await self._client.messages.create(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
                system=system_prompt,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
        except RateLimitError as e:
            logger.warning("Rate limit hit", extra={"error": str(e)})
            raise RateLimitExceeded("API rate limit exceeded") from e
        except APIError as e:
            logger.error(
                "API error",
                extra={"error": str(e), "status": getattr(e, "status_code", None)}
            )
            raise AnthropicClientError(f"API error: {e.message}") from e

        return self._extract_text_response(response)

    def _extract_text_response(self, response) -> str:
        """Extract text content from API response."""
        if not response.content:
            return ""

        # Response content is a list of blocks
        text_blocks = [
            block.text
            for block in response.content
            if hasattr(block, 'text')
        ]

        return "\n".join(text_blocks)
