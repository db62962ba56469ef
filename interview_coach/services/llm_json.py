from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Sequence

from interview_coach.ai.types import AIClient, Attachment
from interview_coach.errors import CoachError, MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def clean_json_response(text: str) -> str:
    """Strip markdown fences and any prose around the outermost JSON object."""
    cleaned = (text or "").strip()
    cleaned = _FENCE_RE.sub("", cleaned).strip()
    if cleaned.startswith("{") and cleaned.endswith("}"):
        return cleaned
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def parse_json_object(text: str) -> dict[str, Any]:
    cleaned = clean_json_response(text)
    if not cleaned:
        raise MalformedResponseError("The AI service returned an empty response.", code="empty_response")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError("The AI service returned a response that is not valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise MalformedResponseError("The AI service returned JSON that is not an object.", code="invalid_schema")
    return parsed


async def json_completion(
    client: AIClient,
    *,
    prompt: str,
    attachments: Sequence[Attachment] = (),
    operation: str = "unknown",
) -> dict[str, Any]:
    started = time.perf_counter()
    try:
        text = await client.generate(prompt, attachments)
    except CoachError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "ai_request_failed operation=%s prompt_len=%s latency_ms=%s: %s",
            operation,
            len(prompt),
            int((time.perf_counter() - started) * 1000),
            exc,
        )
        raise UpstreamError("The AI service request failed. Please try again.") from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    try:
        payload = parse_json_object(text)
    except MalformedResponseError:
        logger.warning(
            "ai_response_malformed operation=%s latency_ms=%s response_len=%s",
            operation,
            latency_ms,
            len(text or ""),
        )
        raise
    logger.info("ai_request_ok operation=%s latency_ms=%s", operation, latency_ms)
    return payload
