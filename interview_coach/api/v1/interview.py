from fastapi import APIRouter, Depends, Request

from interview_coach.api.deps import get_evaluation_client
from interview_coach.core.rate_limit import rate_limit
from interview_coach.errors import InvalidInputError
from interview_coach.schemas.interview import (
    EvaluateAnswerRequest,
    ModeInfo,
    QuestionSet,
    StartInterviewRequest,
)
from interview_coach.services.evaluation_client import EvaluationBackend
from interview_coach.services.modes import evaluation_mode, list_modes, parse_mode

router = APIRouter()


@router.get("/interview/modes", response_model=list[ModeInfo])
async def interview_modes():
    return list_modes()


@router.post("/interview/start", response_model=QuestionSet)
@rate_limit()
async def interview_start(
    request: Request,
    payload: StartInterviewRequest,
    client: EvaluationBackend = Depends(get_evaluation_client),
):
    _ = request
    if not payload.resume_text.strip() or not payload.job_description.strip() or not payload.mode.strip():
        raise InvalidInputError("resume_text, job_description, and mode are required.")
    mode = parse_mode(payload.mode)
    return await client.generate_questions(payload.resume_text, payload.job_description, mode)


@router.post("/interview/evaluate")
@rate_limit()
async def interview_evaluate(
    request: Request,
    payload: EvaluateAnswerRequest,
    client: EvaluationBackend = Depends(get_evaluation_client),
):
    _ = request
    if not payload.question.strip() or not payload.user_answer.strip():
        raise InvalidInputError("question and user_answer are required.")
    mode = evaluation_mode(payload.mode)
    return await client.evaluate_answer(payload.question, payload.user_answer, mode)
