"""
Question intent classification.

Maps a player's free-text question to the instruction that tells the
model what shape of answer to give. Matching is plain case-insensitive
substring containment, evaluated in a fixed order; the first rule that
matches wins.
"""

from dataclasses import dataclass

from .models import QueryIntent


BEST_ROUND_INSTRUCTION = (
    "Identify the single best round by total score (lowest number). "
    "Tell me ONLY its Course Name, Layout Name, Date (formatted as MMMM d, yyyy), "
    "Total Score, and all individual Hole Scores. Do not add any other text, "
    "prefaces, or conversational filler. E.g., 'Course: Maple Hill, Layout: Red, "
    "Date: January 1, 2023, Score: 55 (Holes: 3, 4, 3, 5...)'. "
)

WORST_ROUND_INSTRUCTION = (
    "Identify the single worst round by total score (highest number). "
    "Tell me ONLY its Course Name, Layout Name, Date (formatted as MMMM d, yyyy), "
    "Total Score, and all individual Hole Scores. Do not add any other text, "
    "prefaces, or conversational filler. E.g., 'Course: Oakwood, Layout: Blue, "
    "Date: February 15, 2023, Score: 72 (Holes: 4, 5, 4, 6...)'. "
)

AVERAGE_SCORE_INSTRUCTION = (
    "Calculate the average total score across all rounds. "
    "Provide ONLY the number. E.g., '62'. "
)

MOST_COMMON_COURSE_INSTRUCTION = (
    "Identify the most frequently played course. "
    "Provide ONLY the course name. E.g., 'Pleasant Valley'. "
)

HOLE_SCORES_INSTRUCTION = (
    "List the individual hole scores for each round. For each round, include "
    "Course Name, Layout Name, Date, and then a list of all Hole Scores. "
)

SUMMARY_INSTRUCTION = (
    "Provide a brief, 2-3 sentence summary of the overall trends or highlights "
    "in these scores, mentioning consistent good/bad holes if relevant. "
)

GENERAL_INSTRUCTION = (
    "Answer the user's question directly and concisely. Ensure the response is "
    "no more than 3 sentences and can include hole-by-hole observations. "
)


@dataclass(frozen=True)
class IntentRule:
    """A set of trigger phrases and the instruction they select."""
    intent: QueryIntent
    keywords: tuple[str, ...]
    instruction: str

    def matches(self, lowered_question: str) -> bool:
        return any(keyword in lowered_question for keyword in self.keywords)


# Order matters: "best round summary" must resolve to BEST_ROUND.
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(QueryIntent.BEST_ROUND, ("best round",), BEST_ROUND_INSTRUCTION),
    IntentRule(QueryIntent.WORST_ROUND, ("worst round",), WORST_ROUND_INSTRUCTION),
    IntentRule(QueryIntent.AVERAGE_SCORE, ("average score",), AVERAGE_SCORE_INSTRUCTION),
    IntentRule(
        QueryIntent.MOST_COMMON_COURSE,
        ("most common course",),
        MOST_COMMON_COURSE_INSTRUCTION,
    ),
    IntentRule(
        QueryIntent.HOLE_SCORES,
        ("hole scores", "hole by hole"),
        HOLE_SCORES_INSTRUCTION,
    ),
    IntentRule(QueryIntent.SUMMARY, ("summarize", "summary"), SUMMARY_INSTRUCTION),
)

DEFAULT_RULE = IntentRule(QueryIntent.GENERAL, (), GENERAL_INSTRUCTION)


def classify_question(question: str) -> IntentRule:
    """
    Pick the instruction rule for a question.

    Always returns exactly one rule; DEFAULT_RULE when nothing matches.
    """
    lowered = question.lower()
    for rule in INTENT_RULES:
        if rule.matches(lowered):
            return rule
    return DEFAULT_RULE
