from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from interview_coach.core.interview_config import session_size, speak_delay_seconds, timer_interval_seconds
from interview_coach.errors import CoachError
from interview_coach.schemas.interview import InterviewMode
from interview_coach.services.evaluation_client import EvaluationBackend
from interview_coach.services.modes import parse_mode
from interview_coach.session.state import (
    Advanced,
    AlertDismissed,
    AnswerChanged,
    EvaluationRecorded,
    Event,
    Finished,
    ModeSelected,
    Phase,
    QuestionsLoaded,
    RequestFailed,
    RequestStarted,
    Reset,
    SessionState,
    SetupEdited,
    TranscriptAppended,
    reduce,
)
from interview_coach.session.timer import Timer
from interview_coach.session.voice import NullVoiceBridge, VoiceBridge

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]

GENERATION_FAILED = "Failed to generate questions. Please try again."
EVALUATION_FAILED = "Failed to evaluate answer. Please try again."


class SessionController:
    """Owns one interview session: the state, its timer and its voice bridge."""

    def __init__(
        self,
        backend: EvaluationBackend,
        *,
        voice: Optional[VoiceBridge] = None,
        timer: Optional[Timer] = None,
        speak_delay_s: Optional[float] = None,
        questions_per_session: Optional[int] = None,
    ):
        self._backend = backend
        self._voice: VoiceBridge = voice or NullVoiceBridge()
        self._timer = timer or Timer(interval_s=timer_interval_seconds())
        self._speak_delay_s = speak_delay_seconds() if speak_delay_s is None else speak_delay_s
        self._state = SessionState(session_size=questions_per_session or session_size())
        self._listeners: list[StateListener] = []
        self._speech_task: asyncio.Task | None = None
        self._voice.set_transcript_handler(self.append_transcript)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def timer(self) -> Timer:
        return self._timer

    @property
    def voice(self) -> VoiceBridge:
        return self._voice

    @property
    def pending_speech(self) -> asyncio.Task | None:
        return self._speech_task

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def dispatch(self, event: Event) -> SessionState:
        previous = self._state
        self._state = reduce(previous, event)
        if self._state is not previous:
            logger.debug("session_event event=%s phase=%s", type(event).__name__, self._state.phase.value)
            for listener in self._listeners:
                listener(self._state)
        return self._state

    def _alert(self, message: str) -> None:
        logger.warning("session_alert phase=%s: %s", self._state.phase.value, message)
        self.dispatch(RequestFailed(message))

    def dismiss_alert(self) -> None:
        self.dispatch(AlertDismissed())

    def select_mode(self, mode: InterviewMode | str) -> SessionState:
        return self.dispatch(ModeSelected(parse_mode(mode)))

    def edit_setup(self, resume_text: str, job_description: str) -> SessionState:
        return self.dispatch(SetupEdited(resume_text=resume_text, job_description=job_description))

    async def start_session(self) -> SessionState:
        state = self._state
        if state.phase is not Phase.SETUP or state.busy or state.mode is None:
            return state
        if not state.resume_text.strip() or not state.job_description.strip():
            self._alert("Resume text and job description are required.")
            return self._state

        epoch = state.epoch
        self.dispatch(RequestStarted())
        try:
            question_set = await self._backend.generate_questions(
                state.resume_text, state.job_description, state.mode
            )
        except Exception as exc:  # noqa: BLE001
            if self._state.epoch == epoch:
                logger.warning(
                    "question_generation_failed mode=%s: %s",
                    state.mode.value,
                    exc,
                    exc_info=not isinstance(exc, CoachError),
                )
                self._alert(GENERATION_FAILED)
            return self._state

        if self._state.epoch != epoch:
            logger.info("stale_response_discarded operation=questions epoch=%s", epoch)
            return self._state

        self.dispatch(QuestionsLoaded(question_set))
        if self._state.phase is Phase.IN_PROGRESS:
            self._timer.restart()
            self._schedule_question_speech()
        return self._state

    def set_answer(self, text: str) -> SessionState:
        return self.dispatch(AnswerChanged(text))

    def append_transcript(self, chunk: str) -> None:
        self.dispatch(TranscriptAppended(chunk))

    def toggle_listening(self) -> None:
        if self._voice.listening:
            self._voice.listen_stop()
        else:
            self._voice.listen_start()

    def speak_current_question(self) -> None:
        question = self._state.current_question
        if question is not None and self._state.active:
            self._voice.speak(question.text)

    async def submit_answer(self) -> SessionState:
        state = self._state
        if state.phase is not Phase.IN_PROGRESS or state.busy or state.mode is None:
            return state
        question = state.current_question
        if question is None or not state.answer.strip():
            return state

        epoch = state.epoch
        self.dispatch(RequestStarted())
        self._timer.stop()
        try:
            evaluation = await self._backend.evaluate_answer(question.text, state.answer, state.mode)
        except Exception as exc:  # noqa: BLE001
            if self._state.epoch == epoch and self._state.phase is Phase.IN_PROGRESS:
                logger.warning(
                    "answer_evaluation_failed mode=%s index=%s: %s",
                    state.mode.value,
                    state.current_index,
                    exc,
                    exc_info=not isinstance(exc, CoachError),
                )
                self._timer.start()
                self._alert(EVALUATION_FAILED)
            return self._state

        if self._state.epoch != epoch or self._state.phase is not Phase.IN_PROGRESS:
            logger.info("stale_response_discarded operation=evaluate epoch=%s", epoch)
            return self._state

        return self.dispatch(EvaluationRecorded(evaluation))

    def next_question(self) -> SessionState:
        if self._state.phase is not Phase.FEEDBACK:
            return self._state
        self._cancel_speech()
        self.dispatch(Advanced())
        self._timer.stop()
        self._timer.reset()
        if self._state.phase is Phase.IN_PROGRESS:
            self._timer.start()
            self._schedule_question_speech()
        return self._state

    def finish(self) -> SessionState:
        if not self._state.active:
            return self._state
        self._cancel_speech()
        self._voice.listen_stop()
        self._timer.stop()
        return self.dispatch(Finished())

    def restart(self) -> SessionState:
        self._cancel_speech()
        self._voice.listen_stop()
        self._timer.stop()
        self._timer.reset()
        return self.dispatch(Reset())

    def _cancel_speech(self) -> None:
        if self._speech_task is not None and not self._speech_task.done():
            self._speech_task.cancel()
        self._speech_task = None
        self._voice.cancel()

    def _schedule_question_speech(self) -> None:
        if not self._voice.available:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.speak_current_question()
            return
        epoch = self._state.epoch
        index = self._state.current_index
        self._speech_task = loop.create_task(self._speak_after_delay(epoch, index))

    async def _speak_after_delay(self, epoch: int, index: int) -> None:
        await asyncio.sleep(self._speak_delay_s)
        state = self._state
        if state.epoch != epoch or state.current_index != index or state.phase is not Phase.IN_PROGRESS:
            return
        question = state.current_question
        if question is not None:
            self._voice.speak(question.text)
