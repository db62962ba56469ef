from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]
Score = Annotated[int, Field(ge=1, le=10)]


class InterviewMode(str, Enum):
    PRONUNCIATION = "pronunciation"
    COMMUNICATION = "communication"
    PROBLEM_SOLVING = "problem_solving"
    DISCUSSION = "discussion"

    @classmethod
    def values(cls) -> list[str]:
        return [mode.value for mode in cls]


class _Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    difficulty: Difficulty

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class PronunciationQuestion(_Question):
    type: Literal["pronunciation"] = "pronunciation"
    context: str | None = None


class CommunicationQuestion(_Question):
    type: Literal["communication"] = "communication"
    hint: str | None = None


class ProblemSolvingQuestion(_Question):
    type: Literal["problem_solving"] = "problem_solving"
    hint: str | None = None
    expected_concepts: tuple[str, ...] = ()


class DiscussionQuestion(_Question):
    type: Literal["discussion"] = "discussion"
    key_points: tuple[str, ...] = ()


Question = Annotated[
    Union[PronunciationQuestion, CommunicationQuestion, ProblemSolvingQuestion, DiscussionQuestion],
    Field(discriminator="type"),
]


class QuestionSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def __getitem__(self, index: int):
        return self.questions[index]


class _Evaluation(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: Score
    feedback: str = Field(min_length=1)


class PronunciationEvaluation(_Evaluation):
    mode: Literal["pronunciation"] = "pronunciation"
    pronunciation_score: Score
    clarity_score: Score
    content_score: Score
    suggested_improvement: str | None = None


class CommunicationEvaluation(_Evaluation):
    mode: Literal["communication"] = "communication"
    structure_score: Score
    relevance_score: Score
    clarity_score: Score
    suggested_answer: str | None = None


class ProblemSolvingEvaluation(_Evaluation):
    mode: Literal["problem_solving"] = "problem_solving"
    technical_score: Score
    approach_score: Score
    completeness_score: Score
    suggested_answer: str | None = None


class DiscussionEvaluation(_Evaluation):
    mode: Literal["discussion"] = "discussion"
    depth_score: Score
    communication_score: Score
    coverage_score: Score
    key_points_missed: tuple[str, ...] = ()
    suggested_answer: str | None = None


Evaluation = Annotated[
    Union[PronunciationEvaluation, CommunicationEvaluation, ProblemSolvingEvaluation, DiscussionEvaluation],
    Field(discriminator="mode"),
]


class ModeInfo(BaseModel):
    id: InterviewMode
    title: str
    description: str


class StartInterviewRequest(BaseModel):
    resume_text: str = ""
    job_description: str = ""
    mode: str = ""


class EvaluateAnswerRequest(BaseModel):
    question: str = ""
    user_answer: str = ""
    mode: str | None = None
