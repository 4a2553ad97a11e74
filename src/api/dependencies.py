"""
FastAPI dependency injection.

Dependencies provide instances of services, clients, and configuration
to route handlers. Using dependency injection means:
- Routes don't instantiate their own dependencies (easier to test)
- Dependencies can be overridden in tests via app.dependency_overrides
- Configuration is centralized

Each dependency is a function that FastAPI calls when needed.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from ..config.settings import Settings, get_settings
from ..core.insights.analyst import ScoreAnalyst
from ..infrastructure.anthropic.client import AnthropicConfig, AnthropicTextClient

logger = logging.getLogger(__name__)

# One client per process, created on first use
_text_client: Optional[AnthropicTextClient] = None


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_text_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AnthropicTextClient:
    """
    Provide the Anthropic text client.

    Created on first use and reused afterwards. The client holds no
    per-request state.
    """
    global _text_client

    if _text_client is None:
        config = AnthropicConfig(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            max_tokens=settings.anthropic_max_tokens,
            temperature=settings.anthropic_temperature,
        )
        _text_client = AnthropicTextClient(config)
        logger.info(
            "Created shared Anthropic client",
            extra={"model": config.model}
        )

    return _text_client


def get_score_analyst(
    text_client: Annotated[AnthropicTextClient, Depends(get_text_client)],
) -> ScoreAnalyst:
    """Provide a ScoreAnalyst. It's stateless, so one per request is fine."""
    return ScoreAnalyst(text_client=text_client)


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
ScoreAnalystDep = Annotated[ScoreAnalyst, Depends(get_score_analyst)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
