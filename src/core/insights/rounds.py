"""
Round normalization, ordering and rendering.

Raw rounds come from a document store on the front-end, so any field
may be missing or of the wrong type. Nothing here raises on bad data:
absences degrade to placeholders so the prompt is always well-formed.
"""

import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from .models import Number, Round


NOT_AVAILABLE = "N/A"
NO_DATE = "N/A Date"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _as_number(value: Any) -> Optional[Number]:
    """Return value if it is a finite real number, else None. Booleans don't count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    return value


def _single_line(text: str) -> str:
    # A rendered round must stay on one line of the prompt
    return " ".join(text.splitlines())


def _as_label(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return _single_line(str(value))


def format_number(value: Any) -> str:
    """
    Render a score the way the front-end shows it.

    Integral floats drop the decimal point (55.0 -> "55") and None renders
    as an empty string, matching how the scores were displayed before.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _single_line(str(value))


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def resolve_round_date(raw_date: Any) -> Optional[date]:
    """
    Decode a {seconds, nanoseconds} timestamp into a calendar date (UTC).

    Returns None when the value is missing, malformed, or out of range.
    """
    if not isinstance(raw_date, Mapping):
        return None

    seconds = _as_number(raw_date.get("seconds"))
    if seconds is None:
        return None
    nanoseconds = _as_number(raw_date.get("nanoseconds")) or 0

    try:
        date_ms = seconds * 1000 + nanoseconds / 1_000_000
        return (_EPOCH + timedelta(milliseconds=date_ms)).date()
    except (OverflowError, ValueError):
        return None


def format_round_date(played_on: Optional[date]) -> str:
    """Format as e.g. "January 1, 2023", or the no-date placeholder."""
    if played_on is None:
        return NO_DATE
    return f"{played_on:%B} {played_on.day}, {played_on.year}"


# ---------------------------------------------------------------------------
# Normalizer / Sorter
# ---------------------------------------------------------------------------

def normalize_round(raw: Any) -> Round:
    """
    Convert one raw round record into a Round.

    Accepts the camelCase keys the front-end sends. Anything that
    isn't a mapping becomes a round with every field absent.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    scores = raw.get("scores")
    hole_scores = tuple(scores) if isinstance(scores, list) else None

    return Round(
        course_name=_as_label(raw.get("courseName")),
        layout_name=_as_label(raw.get("layoutName")),
        played_on=resolve_round_date(raw.get("date")),
        total_score=_as_number(raw.get("totalScore")),
        score_to_par=_as_number(raw.get("scoreToPar")) or 0,
        hole_scores=hole_scores,
    )


def _sort_key(round_: Round) -> Number:
    return round_.total_score if round_.total_score is not None else math.inf


def sort_rounds(rounds: Sequence[Round]) -> list[Round]:
    """
    Order rounds by total score, lowest first.

    Rounds without a total sort last. sorted() is stable, so ties and
    the unscored rounds keep their input order. The input is not touched.
    """
    return sorted(rounds, key=_sort_key)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_round_line(position: int, round_: Round) -> str:
    """Render one round as a single prompt line. `position` is 1-based."""
    total = (
        format_number(round_.total_score)
        if round_.has_total_score
        else NOT_AVAILABLE
    )

    line = (
        f"Round {position}: "
        f"Course: {round_.course_name or NOT_AVAILABLE}, "
        f"Layout: {round_.layout_name or NOT_AVAILABLE}, "
        f"Date: {format_round_date(round_.played_on)}, "
        f"Total Score: {total}, "
        f"Score to Par: {format_number(round_.score_to_par)}"
    )

    if round_.hole_scores is not None:
        holes = ", ".join(format_number(score) for score in round_.hole_scores)
        line += f" (Holes: {holes})"

    return line
