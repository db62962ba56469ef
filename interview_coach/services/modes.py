from __future__ import annotations

import logging
from dataclasses import dataclass

from interview_coach.core.interview_config import get_interview_value
from interview_coach.schemas.interview import (
    CommunicationEvaluation,
    CommunicationQuestion,
    DiscussionEvaluation,
    DiscussionQuestion,
    InterviewMode,
    ModeInfo,
    ProblemSolvingEvaluation,
    ProblemSolvingQuestion,
    PronunciationEvaluation,
    PronunciationQuestion,
)
from interview_coach.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeSpec:
    """Question schema, evaluation schema and prompt templates for one interview mode."""

    mode: InterviewMode
    question_model: type
    evaluation_model: type
    question_instructions: str
    evaluation_template: str

    def question_prompt(self, resume_text: str, job_description: str, count: int) -> str:
        return (
            "You are an expert interview coach. Based on this resume and job description, "
            "create tailored interview questions.\n\n"
            f"Resume: {resume_text}\n"
            f"Job Description: {job_description}\n\n"
            + self.question_instructions.replace("{count}", str(count))
        )

    def evaluation_prompt(self, question: str, answer: str) -> str:
        return self.evaluation_template.format(question=question, answer=answer)


_PRONUNCIATION = ModeSpec(
    mode=InterviewMode.PRONUNCIATION,
    question_model=PronunciationQuestion,
    evaluation_model=PronunciationEvaluation,
    question_instructions="""Generate {count} technical pronunciation challenges for an interview. These should be technical terms, phrases, and sentences that the candidate would encounter in their role. Each should test different technical vocabulary.

Return VALID JSON:
{
  "questions": [
    {
      "type": "pronunciation",
      "text": "<technical term or phrase to pronounce>",
      "context": "<a sentence using this term in context>",
      "difficulty": "<easy|medium|hard>"
    }
  ]
}""",
    evaluation_template="""You are evaluating a pronunciation/speaking exercise. The candidate was asked to read/pronounce the following:

Target Text: {question}
What the candidate said (transcribed): {answer}

Evaluate their pronunciation accuracy and clarity. Return VALID JSON:
{{
  "pronunciation_score": <integer 1-10>,
  "clarity_score": <integer 1-10>,
  "content_score": <integer 1-10>,
  "overall_score": <integer 1-10>,
  "feedback": "<specific feedback on pronunciation>",
  "suggested_improvement": "<how to improve pronunciation>"
}}""",
)

_COMMUNICATION = ModeSpec(
    mode=InterviewMode.COMMUNICATION,
    question_model=CommunicationQuestion,
    evaluation_model=CommunicationEvaluation,
    question_instructions="""Generate {count} behavioral and communication interview questions using the STAR method framework. Include a mix of teamwork, leadership, conflict resolution, and adaptability questions.

Return VALID JSON:
{
  "questions": [
    {
      "type": "communication",
      "text": "<behavioral interview question>",
      "hint": "<brief hint about what the interviewer is looking for>",
      "difficulty": "<easy|medium|hard>"
    }
  ]
}""",
    evaluation_template="""You are evaluating a behavioral/communication interview answer.

Question: {question}
Candidate's Answer: {answer}

Evaluate using the STAR method (Situation, Task, Action, Result). Return VALID JSON:
{{
  "structure_score": <integer 1-10, how well they used STAR method>,
  "relevance_score": <integer 1-10>,
  "clarity_score": <integer 1-10>,
  "overall_score": <integer 1-10>,
  "feedback": "<concise actionable feedback>",
  "suggested_answer": "<improved STAR method answer>"
}}""",
)

_PROBLEM_SOLVING = ModeSpec(
    mode=InterviewMode.PROBLEM_SOLVING,
    question_model=ProblemSolvingQuestion,
    evaluation_model=ProblemSolvingEvaluation,
    question_instructions="""Generate {count} technical problem-solving interview questions. Include algorithm challenges, coding problems, and logical thinking questions appropriate for the role.

Return VALID JSON:
{
  "questions": [
    {
      "type": "problem_solving",
      "text": "<problem statement>",
      "hint": "<hint about approach>",
      "expected_concepts": ["<key concept 1>", "<key concept 2>"],
      "difficulty": "<easy|medium|hard>"
    }
  ]
}""",
    evaluation_template="""You are evaluating a technical problem-solving answer.

Question: {question}
Candidate's Answer: {answer}

Evaluate their technical accuracy, approach, and problem-solving methodology. Return VALID JSON:
{{
  "technical_score": <integer 1-10>,
  "approach_score": <integer 1-10>,
  "completeness_score": <integer 1-10>,
  "overall_score": <integer 1-10>,
  "feedback": "<detailed feedback>",
  "suggested_answer": "<optimal approach/solution>"
}}""",
)

_DISCUSSION = ModeSpec(
    mode=InterviewMode.DISCUSSION,
    question_model=DiscussionQuestion,
    evaluation_model=DiscussionEvaluation,
    question_instructions="""Generate {count} technical discussion / system design interview questions. Include architecture decisions, trade-offs, and open-ended technical discussions.

Return VALID JSON:
{
  "questions": [
    {
      "type": "discussion",
      "text": "<discussion question or scenario>",
      "key_points": ["<point to cover 1>", "<point to cover 2>"],
      "difficulty": "<easy|medium|hard>"
    }
  ]
}""",
    evaluation_template="""You are evaluating a technical discussion/system design answer.

Question: {question}
Candidate's Answer: {answer}

Evaluate their depth of knowledge, ability to discuss trade-offs, and overall communication. Return VALID JSON:
{{
  "depth_score": <integer 1-10>,
  "communication_score": <integer 1-10>,
  "coverage_score": <integer 1-10>,
  "overall_score": <integer 1-10>,
  "feedback": "<detailed feedback>",
  "key_points_missed": ["<missed point 1>", "<missed point 2>"],
  "suggested_answer": "<comprehensive answer covering key points>"
}}""",
)

MODE_SPECS: dict[InterviewMode, ModeSpec] = {
    spec.mode: spec for spec in (_PRONUNCIATION, _COMMUNICATION, _PROBLEM_SOLVING, _DISCUSSION)
}

DEFAULT_EVALUATION_MODE = InterviewMode.COMMUNICATION


def parse_mode(value: str | InterviewMode | None) -> InterviewMode:
    if isinstance(value, InterviewMode):
        return value
    raw = (value or "").strip().lower()
    try:
        return InterviewMode(raw)
    except ValueError as exc:
        raise InvalidInputError(
            f"Invalid mode. Must be one of: {', '.join(InterviewMode.values())}",
            code="invalid_mode",
        ) from exc


def evaluation_mode(value: str | InterviewMode | None) -> InterviewMode:
    """Mode used to grade an answer; blank or unknown values grade as communication."""
    try:
        return parse_mode(value)
    except InvalidInputError:
        if str(value or "").strip():
            logger.info("evaluation_mode_defaulted requested=%s", value)
        return DEFAULT_EVALUATION_MODE


def get_mode_spec(mode: InterviewMode) -> ModeSpec:
    return MODE_SPECS[mode]


def mode_info(mode: InterviewMode) -> ModeInfo:
    meta = get_interview_value(f"modes.{mode.value}", {}) or {}
    return ModeInfo(
        id=mode,
        title=str(meta.get("title") or mode.value.replace("_", " ").title()),
        description=str(meta.get("description") or ""),
    )


def list_modes() -> list[ModeInfo]:
    return [mode_info(mode) for mode in InterviewMode]
