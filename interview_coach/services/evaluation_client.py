from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from interview_coach.ai.types import AIClient
from interview_coach.core.interview_config import session_size
from interview_coach.errors import InvalidInputError, MalformedResponseError
from interview_coach.schemas.interview import Evaluation, InterviewMode, QuestionSet
from interview_coach.services.llm_json import json_completion
from interview_coach.services.modes import get_mode_spec, parse_mode

logger = logging.getLogger(__name__)


class EvaluationBackend(Protocol):
    async def generate_questions(
        self, resume_text: str, job_description: str, mode: InterviewMode
    ) -> QuestionSet: ...

    async def evaluate_answer(
        self, question_text: str, answer_text: str, mode: InterviewMode
    ) -> Evaluation: ...


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "schema mismatch"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid')}" if location else str(first.get("msg", "invalid"))


def build_question_set(payload: dict[str, Any], mode: InterviewMode, size: int) -> QuestionSet:
    raw_questions = payload.get("questions")
    if not isinstance(raw_questions, list):
        raise MalformedResponseError("The AI service response is missing the questions list.", code="invalid_schema")
    if len(raw_questions) < size:
        raise MalformedResponseError(
            f"The AI service returned {len(raw_questions)} questions, expected {size}.",
            code="invalid_schema",
        )
    if len(raw_questions) > size:
        logger.info("question_set_truncated mode=%s received=%s kept=%s", mode.value, len(raw_questions), size)

    spec = get_mode_spec(mode)
    questions = []
    for index, raw in enumerate(raw_questions[:size]):
        if not isinstance(raw, dict):
            raise MalformedResponseError(f"Question {index + 1} is not an object.", code="invalid_schema")
        item = dict(raw)
        item.setdefault("type", mode.value)
        if item["type"] != mode.value:
            raise MalformedResponseError(
                f"Question {index + 1} has type '{item['type']}', expected '{mode.value}'.",
                code="invalid_schema",
            )
        try:
            questions.append(spec.question_model.model_validate(item))
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Question {index + 1} does not match the {mode.value} schema ({_first_error(exc)}).",
                code="invalid_schema",
            ) from exc
    return QuestionSet(questions=tuple(questions))


def build_evaluation(payload: dict[str, Any], mode: InterviewMode) -> Evaluation:
    spec = get_mode_spec(mode)
    item = {key: value for key, value in payload.items() if key != "mode"}
    try:
        return spec.evaluation_model.model_validate({**item, "mode": mode.value})
    except ValidationError as exc:
        raise MalformedResponseError(
            f"The evaluation does not match the {mode.value} schema ({_first_error(exc)}).",
            code="invalid_schema",
        ) from exc


class EvaluationClient:
    """Question generation and answer evaluation backed by the AI collaborator."""

    def __init__(self, ai_client: AIClient, *, questions_per_session: int | None = None):
        self._ai = ai_client
        self._size = questions_per_session or session_size()

    @property
    def questions_per_session(self) -> int:
        return self._size

    async def generate_questions(
        self, resume_text: str, job_description: str, mode: InterviewMode | str
    ) -> QuestionSet:
        mode = parse_mode(mode)
        if not (resume_text or "").strip() or not (job_description or "").strip():
            raise InvalidInputError("resume_text, job_description, and mode are required.")

        prompt = get_mode_spec(mode).question_prompt(resume_text, job_description, self._size)
        payload = await json_completion(self._ai, prompt=prompt, operation=f"questions:{mode.value}")
        return build_question_set(payload, mode, self._size)

    async def evaluate_answer(
        self, question_text: str, answer_text: str, mode: InterviewMode | str
    ) -> Evaluation:
        mode = parse_mode(mode)
        if not (question_text or "").strip() or not (answer_text or "").strip():
            raise InvalidInputError("question and user_answer are required.")

        prompt = get_mode_spec(mode).evaluation_prompt(question_text, answer_text)
        payload = await json_completion(self._ai, prompt=prompt, operation=f"evaluate:{mode.value}")
        return build_evaluation(payload, mode)
