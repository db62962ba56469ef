from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, Field

Priority = Literal["high", "medium", "low"]


def _round_percentage(value):
    if isinstance(value, float):
        return int(round(value))
    return value


Percentage = Annotated[int, BeforeValidator(_round_percentage), Field(ge=0, le=100)]


class SectionFeedback(BaseModel):
    summary: str
    experience: str
    skills: str
    education: str


class Recommendation(BaseModel):
    priority: Annotated[Priority, BeforeValidator(lambda v: v.strip().lower() if isinstance(v, str) else v)]
    title: str
    description: str


class ResumeAnalysis(BaseModel):
    ats_score: Percentage
    keyword_score: Percentage
    format_score: Percentage
    experience_score: Percentage
    skills_score: Percentage
    missing_keywords: list[str] = Field(default_factory=list)
    section_feedback: SectionFeedback
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary_feedback: str
    extracted_resume_text: str = ""
