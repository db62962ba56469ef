from fastapi import APIRouter

from interview_coach.ai.config import load_ai_config
from interview_coach.core.interview_config import session_size

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness plus the active AI provider and session size.")
async def health_check():
    return {
        "status": "healthy",
        "ai_provider": load_ai_config().provider,
        "questions_per_session": session_size(),
    }
