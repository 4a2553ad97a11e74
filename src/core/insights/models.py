"""
Domain models for disc golf score insights.

These models represent the core business concepts. They have no dependencies
on external frameworks or APIs. A round arrives as loosely-typed JSON from
the front-end; everything in this package works on the normalized form.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional, Union


Number = Union[int, float]


class QueryIntent(Enum):
    """
    What shape of answer the player is asking for.

    Each intent maps to one instruction block in the prompt. GENERAL is
    the fallback when nothing more specific matches.
    """
    BEST_ROUND = "best_round"
    WORST_ROUND = "worst_round"
    AVERAGE_SCORE = "average_score"
    MOST_COMMON_COURSE = "most_common_course"
    HOLE_SCORES = "hole_scores"
    SUMMARY = "summary"
    GENERAL = "general"


@dataclass(frozen=True)
class Round:
    """
    One completed round, normalized for display.

    Frozen because a round is a value: two rounds built from the same
    raw record compare equal. Every field is optional since the
    front-end sends whatever it has stored.
    """
    course_name: Optional[str] = None
    layout_name: Optional[str] = None
    played_on: Optional[date] = None
    total_score: Optional[Number] = None
    score_to_par: Number = 0
    hole_scores: Optional[tuple[Any, ...]] = None

    @property
    def has_total_score(self) -> bool:
        return self.total_score is not None


@dataclass
class InsightRequest:
    """
    A validated question about a player's rounds.

    `rounds` holds a copy of the raw records; normalization happens
    when the prompt is built.
    """
    question: str
    rounds: list[Any] = field(default_factory=list)
