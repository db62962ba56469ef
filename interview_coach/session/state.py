"""Interview session state and its transitions.

``SessionState`` is an immutable, serializable snapshot. Every transition is a
pure function ``(state, event) -> state`` registered in ``_REDUCERS``; events
that are not valid in the current phase leave the state unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from interview_coach.schemas.interview import Evaluation, InterviewMode, Question, QuestionSet
from interview_coach.session.summary import SessionResult, SessionSummary, aggregate


class Phase(str, Enum):
    MODE_SELECT = "mode_select"
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FEEDBACK = "feedback"
    SUMMARY = "summary"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    epoch: int = 0
    session_size: int = Field(default=5, ge=1)
    phase: Phase = Phase.MODE_SELECT
    mode: Optional[InterviewMode] = None
    resume_text: str = ""
    job_description: str = ""
    question_set: Optional[QuestionSet] = None
    current_index: int = 0
    answer: str = ""
    evaluation: Optional[Evaluation] = None
    results: tuple[SessionResult, ...] = ()
    summary: Optional[SessionSummary] = None
    busy: bool = False
    alert: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.phase in (Phase.IN_PROGRESS, Phase.FEEDBACK)

    @property
    def current_question(self) -> Optional[Question]:
        if self.question_set is None or not self.question_set.questions:
            return None
        return self.question_set.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.question_set is not None and self.current_index >= len(self.question_set) - 1


@dataclass(frozen=True)
class ModeSelected:
    mode: InterviewMode


@dataclass(frozen=True)
class SetupEdited:
    resume_text: str
    job_description: str


@dataclass(frozen=True)
class RequestStarted:
    pass


@dataclass(frozen=True)
class RequestFailed:
    message: str


@dataclass(frozen=True)
class QuestionsLoaded:
    question_set: QuestionSet


@dataclass(frozen=True)
class AnswerChanged:
    text: str


@dataclass(frozen=True)
class TranscriptAppended:
    chunk: str


@dataclass(frozen=True)
class EvaluationRecorded:
    evaluation: Evaluation


@dataclass(frozen=True)
class Advanced:
    pass


@dataclass(frozen=True)
class Finished:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class AlertDismissed:
    pass


Event = Union[
    ModeSelected,
    SetupEdited,
    RequestStarted,
    RequestFailed,
    QuestionsLoaded,
    AnswerChanged,
    TranscriptAppended,
    EvaluationRecorded,
    Advanced,
    Finished,
    Reset,
    AlertDismissed,
]


def _mode_selected(state: SessionState, event: ModeSelected) -> SessionState:
    if state.phase not in (Phase.MODE_SELECT, Phase.SETUP) or state.busy:
        return state
    return state.model_copy(update={"phase": Phase.SETUP, "mode": event.mode, "alert": None})


def _setup_edited(state: SessionState, event: SetupEdited) -> SessionState:
    if state.busy:
        return state
    return state.model_copy(
        update={"resume_text": event.resume_text, "job_description": event.job_description}
    )


def _request_started(state: SessionState, event: RequestStarted) -> SessionState:
    if state.phase not in (Phase.SETUP, Phase.IN_PROGRESS) or state.busy:
        return state
    return state.model_copy(update={"busy": True, "alert": None})


def _request_failed(state: SessionState, event: RequestFailed) -> SessionState:
    if state.phase not in (Phase.SETUP, Phase.IN_PROGRESS):
        return state
    return state.model_copy(update={"busy": False, "alert": event.message})


def _questions_loaded(state: SessionState, event: QuestionsLoaded) -> SessionState:
    if state.phase is not Phase.SETUP:
        return state
    questions = event.question_set.questions[: state.session_size]
    if not questions:
        return state.model_copy(update={"busy": False, "alert": "No questions were generated. Please try again."})
    return state.model_copy(
        update={
            "phase": Phase.IN_PROGRESS,
            "question_set": QuestionSet(questions=questions),
            "current_index": 0,
            "answer": "",
            "evaluation": None,
            "results": (),
            "summary": None,
            "busy": False,
            "alert": None,
        }
    )


def _answer_changed(state: SessionState, event: AnswerChanged) -> SessionState:
    if state.phase is not Phase.IN_PROGRESS or state.busy:
        return state
    return state.model_copy(update={"answer": event.text})


def _transcript_appended(state: SessionState, event: TranscriptAppended) -> SessionState:
    chunk = event.chunk.strip()
    if state.phase is not Phase.IN_PROGRESS or state.busy or not chunk:
        return state
    answer = f"{state.answer} {chunk}" if state.answer else chunk
    return state.model_copy(update={"answer": answer})


def _evaluation_recorded(state: SessionState, event: EvaluationRecorded) -> SessionState:
    if state.phase is not Phase.IN_PROGRESS or len(state.results) >= state.session_size:
        return state
    question = state.current_question
    if question is None:
        return state
    result = SessionResult(
        index=state.current_index,
        question=question,
        answer=state.answer,
        evaluation=event.evaluation,
    )
    return state.model_copy(
        update={
            "phase": Phase.FEEDBACK,
            "evaluation": event.evaluation,
            "results": state.results + (result,),
            "busy": False,
            "alert": None,
        }
    )


def _to_summary(state: SessionState) -> SessionState:
    return state.model_copy(
        update={
            "phase": Phase.SUMMARY,
            "answer": "",
            "evaluation": None,
            "summary": aggregate(state.results, state.mode),
            "busy": False,
            "alert": None,
        }
    )


def _advanced(state: SessionState, event: Advanced) -> SessionState:
    if state.phase is not Phase.FEEDBACK:
        return state
    if state.is_last_question:
        return _to_summary(state)
    return state.model_copy(
        update={
            "phase": Phase.IN_PROGRESS,
            "current_index": state.current_index + 1,
            "answer": "",
            "evaluation": None,
            "alert": None,
        }
    )


def _finished(state: SessionState, event: Finished) -> SessionState:
    if not state.active:
        return state
    return _to_summary(state)


def _reset(state: SessionState, event: Reset) -> SessionState:
    return SessionState(
        epoch=state.epoch + 1,
        session_size=state.session_size,
        resume_text=state.resume_text,
        job_description=state.job_description,
    )


def _alert_dismissed(state: SessionState, event: AlertDismissed) -> SessionState:
    return state.model_copy(update={"alert": None})


_REDUCERS: dict[type, Callable[[SessionState, Event], SessionState]] = {
    ModeSelected: _mode_selected,
    SetupEdited: _setup_edited,
    RequestStarted: _request_started,
    RequestFailed: _request_failed,
    QuestionsLoaded: _questions_loaded,
    AnswerChanged: _answer_changed,
    TranscriptAppended: _transcript_appended,
    EvaluationRecorded: _evaluation_recorded,
    Advanced: _advanced,
    Finished: _finished,
    Reset: _reset,
    AlertDismissed: _alert_dismissed,
}


def reduce(state: SessionState, event: Event) -> SessionState:
    reducer = _REDUCERS.get(type(event))
    if reducer is None:
        raise TypeError(f"Unknown session event: {type(event).__name__}")
    return reducer(state, event)
