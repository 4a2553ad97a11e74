"""
Disc golf score analysis logic.

Contains the analyst service, round handling, intent classification
and prompt assembly.
"""

from .analyst import (
    InsightGenerationError,
    InsightRequestError,
    ScoreAnalyst,
    TextModelClient,
    parse_insight_request,
)
from .intent import INTENT_RULES, IntentRule, classify_question
from .models import InsightRequest, QueryIntent, Round
from .prompts import SYSTEM_PROMPT, build_insight_prompt
from .rounds import normalize_round, render_round_line, sort_rounds

__all__ = [
    "InsightGenerationError",
    "InsightRequestError",
    "ScoreAnalyst",
    "TextModelClient",
    "parse_insight_request",
    "INTENT_RULES",
    "IntentRule",
    "classify_question",
    "InsightRequest",
    "QueryIntent",
    "Round",
    "SYSTEM_PROMPT",
    "build_insight_prompt",
    "normalize_round",
    "render_round_line",
    "sort_rounds",
]
