from __future__ import annotations

import os
from typing import Optional, Sequence

from google import genai
from google.genai import types

from interview_coach.ai.types import Attachment


class GeminiProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.4,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")

        self._client = genai.Client(api_key=key)

    async def generate(
        self, prompt: str, attachments: Sequence[Attachment] = ()
    ) -> str:
        contents: list = [prompt]
        for attachment in attachments:
            contents.append(
                types.Part.from_bytes(data=attachment.data, mime_type=attachment.mime_type)
            )

        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=contents,
            config=types.GenerateContentConfig(
                temperature=self._temperature,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""
