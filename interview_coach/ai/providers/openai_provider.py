from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from openai import AsyncOpenAI

from interview_coach.ai.types import Attachment
from interview_coach.parsing import extract_pdf_text

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.4,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            max_retries=0,
        )

    def _inline_attachments(self, prompt: str, attachments: Sequence[Attachment]) -> str:
        # Chat completions take text only, so documents are read locally first.
        parts = [prompt]
        for attachment in attachments:
            if attachment.mime_type != "application/pdf":
                logger.warning("openai_attachment_skipped mime=%s", attachment.mime_type)
                continue
            parsed = extract_pdf_text(attachment.data)
            for warning in parsed.warnings:
                logger.warning("openai_pdf_warning file=%s: %s", attachment.filename, warning)
            parts.append(f"Attached document ({attachment.filename or 'resume.pdf'}):\n{parsed.text}")
        return "\n\n".join(parts)

    async def generate(
        self, prompt: str, attachments: Sequence[Attachment] = ()
    ) -> str:
        content = self._inline_attachments(prompt, attachments) if attachments else prompt
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": content}],
            temperature=self._temperature,
            response_format={"type": "json_object"},
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
