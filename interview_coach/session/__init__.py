from .controller import SessionController
from .state import Phase, SessionState, reduce
from .summary import SessionResult, SessionSummary, aggregate, score_band
from .timer import Timer, format_elapsed
from .voice import FakeVoiceBridge, NullVoiceBridge, OpenAIVoiceBridge, VoiceBridge

__all__ = [
    "FakeVoiceBridge",
    "NullVoiceBridge",
    "OpenAIVoiceBridge",
    "Phase",
    "SessionController",
    "SessionResult",
    "SessionState",
    "SessionSummary",
    "Timer",
    "VoiceBridge",
    "aggregate",
    "format_elapsed",
    "reduce",
    "score_band",
]
