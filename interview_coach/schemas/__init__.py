from .interview import (
    CommunicationEvaluation,
    CommunicationQuestion,
    DiscussionEvaluation,
    DiscussionQuestion,
    EvaluateAnswerRequest,
    Evaluation,
    InterviewMode,
    ModeInfo,
    ProblemSolvingEvaluation,
    ProblemSolvingQuestion,
    PronunciationEvaluation,
    PronunciationQuestion,
    Question,
    QuestionSet,
    StartInterviewRequest,
)
from .resume import Recommendation, ResumeAnalysis, SectionFeedback

__all__ = [
    "CommunicationEvaluation",
    "CommunicationQuestion",
    "DiscussionEvaluation",
    "DiscussionQuestion",
    "EvaluateAnswerRequest",
    "Evaluation",
    "InterviewMode",
    "ModeInfo",
    "ProblemSolvingEvaluation",
    "ProblemSolvingQuestion",
    "PronunciationEvaluation",
    "PronunciationQuestion",
    "Question",
    "QuestionSet",
    "Recommendation",
    "ResumeAnalysis",
    "SectionFeedback",
    "StartInterviewRequest",
]
