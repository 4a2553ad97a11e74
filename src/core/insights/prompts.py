"""
Prompt construction for score analysis.

The prompts are here, not in config, because they're core business logic.
Changing them changes what the product does. They should be version
controlled and reviewed like code.
"""

from collections.abc import Iterable
from typing import Any

from .intent import IntentRule, classify_question
from .rounds import normalize_round, render_round_line, sort_rounds


SYSTEM_PROMPT = (
    "You are a concise disc golf score analyst. Provide direct, brief answers "
    "to questions about scores and hole-by-hole performance. Avoid unnecessary "
    "conversational filler, intros, or lengthy explanations unless explicitly "
    "asked for. When listing, use bullet points or a clear, simple format. "
    "Prioritize factual data from the provided scores."
)

ANALYSIS_PREAMBLE = (
    "Analyze the following disc golf scores and provide insights based on "
    "overall and hole-by-hole performance. "
)

NO_SCORES_NOTICE = "No scores available to analyze."

SCORES_MARKER = "Here are the scores:\n"

QUESTION_TEMPLATE = '\nUser\'s specific question: "{question}".'


def render_score_listing(raw_rounds: Iterable[Any]) -> str:
    """Normalize, sort and render rounds, one line each."""
    ordered = sort_rounds([normalize_round(raw) for raw in raw_rounds])
    return "".join(
        render_round_line(position, round_) + "\n"
        for position, round_ in enumerate(ordered, start=1)
    )


def assemble_prompt(question: str, rule: IntentRule, raw_rounds: list[Any]) -> str:
    """
    Build the prompt from an already-selected rule.

    With no rounds the prompt ends at the no-data notice: there is nothing
    to list and nothing for the question to refer to.
    """
    prompt = ANALYSIS_PREAMBLE + rule.instruction

    if not raw_rounds:
        return prompt + NO_SCORES_NOTICE

    prompt += SCORES_MARKER
    prompt += render_score_listing(raw_rounds)
    prompt += QUESTION_TEMPLATE.format(question=question)
    return prompt


def build_insight_prompt(question: str, raw_rounds: list[Any]) -> str:
    """Classify the question and assemble the full prompt."""
    return assemble_prompt(question, classify_question(question), raw_rounds)
