from __future__ import annotations

import logging
from typing import Sequence

from interview_coach.ai.factory import get_ai_client
from interview_coach.ai.types import AIClient, Attachment
from interview_coach.errors import UpstreamError
from interview_coach.services.evaluation_client import EvaluationBackend, EvaluationClient

logger = logging.getLogger(__name__)


class UnconfiguredAIClient:
    def __init__(self, reason: str):
        self._reason = reason

    async def generate(self, prompt: str, attachments: Sequence[Attachment] = ()) -> str:
        logger.warning("ai_request_skipped reason=%s", self._reason)
        raise UpstreamError("The AI service is not configured.", code="ai_unconfigured")


def get_ai() -> AIClient:
    try:
        return get_ai_client()
    except (RuntimeError, ValueError) as exc:
        logger.error("ai_client_unavailable: %s", exc)
        return UnconfiguredAIClient(str(exc))


def get_evaluation_client() -> EvaluationBackend:
    return EvaluationClient(get_ai())
