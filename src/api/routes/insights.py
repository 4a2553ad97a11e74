"""
Score insight API endpoint.

The front-end posts the player's question along with every round it
has stored. We build a prompt from both and return the model's answer
as-is. Validation and generation failures are raised as core errors and
mapped to HTTP responses by the handlers registered in main.py.
"""

import logging
from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from ...core.insights.analyst import parse_insight_request
from ..dependencies import ScoreAnalystDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class InsightRequestBody(BaseModel):
    """
    Incoming question and rounds.

    Fields are untyped here; parse_insight_request validates them and
    raises InsightRequestError on any problem.
    """
    prompt: Any = Field(default=None, description="The player's question")
    rounds: Any = Field(
        default=None,
        description="Round records (courseName, layoutName, date, totalScore, scoreToPar, scores)"
    )


class InsightResponse(BaseModel):
    """The model's answer, unmodified."""
    response: str = Field(description="Text returned by the AI analyst")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/gemini-insight",
    response_model=InsightResponse,
    status_code=status.HTTP_200_OK,
    include_in_schema=False,
)
@router.post(
    "/insight",
    response_model=InsightResponse,
    status_code=status.HTTP_200_OK,
    summary="Ask a question about your rounds",
    description="Classify the question, build an analysis prompt from the rounds and return the AI's answer",
)
async def get_insight(
    body: InsightRequestBody,
    analyst: ScoreAnalystDep,
) -> InsightResponse:
    """
    Answer a question about the submitted rounds.

    Raises InsightRequestError (400) for a bad body and
    InsightGenerationError (500) when the model call fails.
    """
    request = parse_insight_request(body.model_dump())

    logger.info(
        "Insight requested",
        extra={"round_count": len(request.rounds)}
    )

    text = await analyst.answer(request)

    return InsightResponse(response=text)
