"""Speech capabilities used by the interview session.

The controller only sees the ``VoiceBridge`` contract. ``NullVoiceBridge``
stands in where no speech capability exists, ``FakeVoiceBridge`` is a
scriptable double for tests and headless hosts, and ``OpenAIVoiceBridge``
synthesizes and transcribes through the OpenAI audio endpoints.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable, Optional, Protocol

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

TranscriptHandler = Callable[[str], None]
PlaybackSink = Callable[[bytes], Awaitable[None]]


class VoiceBridge(Protocol):
    @property
    def available(self) -> bool: ...

    @property
    def listening(self) -> bool: ...

    @property
    def speaking(self) -> bool: ...

    def set_transcript_handler(self, handler: Optional[TranscriptHandler]) -> None: ...

    def listen_start(self) -> None: ...

    def listen_stop(self) -> None: ...

    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class BaseVoiceBridge:
    """Listening/speaking flags and toggle rules shared by every bridge."""

    available = True

    def __init__(self) -> None:
        self._listening = False
        self._speaking = False
        self._handler: Optional[TranscriptHandler] = None

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def speaking(self) -> bool:
        return self._speaking

    def set_transcript_handler(self, handler: Optional[TranscriptHandler]) -> None:
        self._handler = handler

    def listen_start(self) -> None:
        if self._listening:
            return
        self._listening = True
        try:
            self._start_listening()
        except Exception as exc:  # noqa: BLE001
            self.on_platform_error(exc)

    def listen_stop(self) -> None:
        if not self._listening:
            return
        self._listening = False
        self._stop_listening()

    def speak(self, text: str) -> None:
        if self._speaking:
            self.cancel()
            return
        if not (text or "").strip():
            return
        try:
            self._start_speaking(text)
        except Exception as exc:  # noqa: BLE001
            logger.warning("voice_speak_error: %s", exc)
            return
        self._speaking = True

    def cancel(self) -> None:
        if not self._speaking:
            return
        self._speaking = False
        self._cancel_speaking()

    def on_platform_error(self, exc: BaseException) -> None:
        logger.warning("voice_listen_error: %s", exc)
        self._listening = False

    def emit_final(self, chunk: str) -> None:
        text = (chunk or "").strip()
        if not self._listening or not text:
            return
        if self._handler is not None:
            self._handler(text)

    def speech_finished(self) -> None:
        self._speaking = False

    def _start_listening(self) -> None:
        pass

    def _stop_listening(self) -> None:
        pass

    def _start_speaking(self, text: str) -> None:
        pass

    def _cancel_speaking(self) -> None:
        pass


class NullVoiceBridge(BaseVoiceBridge):
    available = False

    def listen_start(self) -> None:
        return None

    def speak(self, text: str) -> None:
        return None


class FakeVoiceBridge(BaseVoiceBridge):
    def __init__(self) -> None:
        super().__init__()
        self.spoken: list[str] = []
        self.cancelled = 0

    def _start_speaking(self, text: str) -> None:
        self.spoken.append(text)

    def _cancel_speaking(self) -> None:
        self.cancelled += 1

    def fail(self, message: str = "no-speech") -> None:
        self.on_platform_error(RuntimeError(message))


class OpenAIVoiceBridge(BaseVoiceBridge):
    def __init__(
        self,
        playback: PlaybackSink,
        *,
        api_key: Optional[str] = None,
        tts_model: Optional[str] = None,
        tts_voice: Optional[str] = None,
        transcribe_model: Optional[str] = None,
    ):
        super().__init__()
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")
        self._client = AsyncOpenAI(api_key=key, base_url=(os.getenv("OPENAI_BASE_URL") or None))
        self._playback = playback
        self._tts_model = tts_model or os.getenv("OPENAI_TTS_MODEL", "gpt-4o-mini-tts")
        self._tts_voice = tts_voice or os.getenv("OPENAI_TTS_VOICE", "alloy")
        self._transcribe_model = transcribe_model or os.getenv("OPENAI_TRANSCRIBE_MODEL", "gpt-4o-mini-transcribe")
        self._speech_task: asyncio.Task | None = None

    def _start_speaking(self, text: str) -> None:
        self._speech_task = asyncio.get_running_loop().create_task(self._synthesize(text))

    def _cancel_speaking(self) -> None:
        if self._speech_task is not None and not self._speech_task.done():
            self._speech_task.cancel()
        self._speech_task = None

    async def _synthesize(self, text: str) -> None:
        try:
            response = await self._client.audio.speech.create(
                model=self._tts_model,
                voice=self._tts_voice,
                input=text,
            )
            await self._playback(response.content)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.warning("voice_speak_failed model=%s: %s", self._tts_model, exc)
        finally:
            if asyncio.current_task() is self._speech_task:
                self.speech_finished()

    async def feed_audio(self, content: bytes, filename: str = "chunk.wav") -> None:
        """Transcribe one recorded chunk and hand the final text to the session."""
        if not self._listening:
            return
        try:
            response = await self._client.audio.transcriptions.create(
                model=self._transcribe_model,
                file=(filename, content),
            )
        except Exception as exc:  # noqa: BLE001
            self.on_platform_error(exc)
            return
        self.emit_final(getattr(response, "text", "") or "")
