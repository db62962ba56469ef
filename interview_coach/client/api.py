from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from interview_coach.core.config import settings
from interview_coach.errors import CoachError, InvalidInputError, MalformedResponseError, UpstreamError
from interview_coach.schemas.interview import Evaluation, InterviewMode, QuestionSet
from interview_coach.schemas.resume import ResumeAnalysis

logger = logging.getLogger(__name__)

_EVALUATION_ADAPTER: TypeAdapter = TypeAdapter(Evaluation)


class CoachApiClient:
    """HTTP client for the interview coach API; a drop-in ``EvaluationBackend``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._http = http_client or httpx.AsyncClient(timeout=None)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CoachApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _post(self, path: str, fallback_error: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._http.post(f"{self._base_url}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("coach_api_transport_failed path=%s: %s", path, exc)
            raise UpstreamError(fallback_error, code="transport_error") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code != 200:
            message = fallback_error
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            error_cls: type[CoachError] = InvalidInputError if 400 <= response.status_code < 500 else UpstreamError
            raise error_cls(message)

        if not isinstance(body, dict):
            raise MalformedResponseError(f"{fallback_error} The server response was not a JSON object.")
        return body

    async def analyze_resume(self, filename: str, content: bytes, job_description: str) -> ResumeAnalysis:
        body = await self._post(
            "/analyze",
            "Analysis failed",
            files={"resume": (filename, content, "application/pdf")},
            data={"job_description": job_description},
        )
        try:
            return ResumeAnalysis.model_validate(body)
        except ValidationError as exc:
            raise MalformedResponseError("Analysis failed: unexpected response shape.") from exc

    async def generate_questions(
        self, resume_text: str, job_description: str, mode: InterviewMode
    ) -> QuestionSet:
        body = await self._post(
            "/interview/start",
            "Failed to start interview",
            json={"resume_text": resume_text, "job_description": job_description, "mode": mode.value},
        )
        try:
            return QuestionSet.model_validate(body)
        except ValidationError as exc:
            raise MalformedResponseError("Failed to start interview: unexpected response shape.") from exc

    async def evaluate_answer(
        self, question_text: str, answer_text: str, mode: InterviewMode
    ) -> Evaluation:
        body = await self._post(
            "/interview/evaluate",
            "Failed to evaluate answer",
            json={"question": question_text, "user_answer": answer_text, "mode": mode.value},
        )
        try:
            return _EVALUATION_ADAPTER.validate_python(body)
        except ValidationError as exc:
            raise MalformedResponseError("Failed to evaluate answer: unexpected response shape.") from exc
