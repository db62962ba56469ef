from __future__ import annotations

from typing import Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from interview_coach.core.interview_config import get_interview_value
from interview_coach.schemas.interview import Evaluation, InterviewMode, Question

ScoreBand = Literal["strong", "fair", "weak"]


class SessionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    question: Question
    answer: str
    evaluation: Evaluation


class SummaryItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    question: str
    answer: str
    overall_score: int
    feedback: str
    band: ScoreBand


class SessionSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Optional[InterviewMode] = None
    question_count: int
    average_overall_score: int = Field(ge=0, le=10)
    band: ScoreBand
    breakdown: tuple[SummaryItem, ...] = ()


def score_band(score: int, *, strong: Optional[int] = None, fair: Optional[int] = None) -> ScoreBand:
    strong = strong if strong is not None else int(get_interview_value("scoring.bands.strong", 7))
    fair = fair if fair is not None else int(get_interview_value("scoring.bands.fair", 5))
    if score >= strong:
        return "strong"
    if score >= fair:
        return "fair"
    return "weak"


def rounded_mean(scores: Sequence[int]) -> int:
    """Arithmetic mean rounded half up; 0 for no scores."""
    if not scores:
        return 0
    total = sum(scores)
    count = len(scores)
    return (2 * total + count) // (2 * count)


def aggregate(results: Sequence[SessionResult], mode: Optional[InterviewMode] = None) -> SessionSummary:
    average = rounded_mean([r.evaluation.overall_score for r in results])
    breakdown = tuple(
        SummaryItem(
            index=r.index,
            question=r.question.text,
            answer=r.answer,
            overall_score=r.evaluation.overall_score,
            feedback=r.evaluation.feedback,
            band=score_band(r.evaluation.overall_score),
        )
        for r in results
    )
    return SessionSummary(
        mode=mode,
        question_count=len(results),
        average_overall_score=average,
        band=score_band(average),
        breakdown=breakdown,
    )
