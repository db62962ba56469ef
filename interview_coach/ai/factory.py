from interview_coach.ai.config import load_ai_config
from interview_coach.ai.types import AIClient

from interview_coach.ai.providers.gemini_provider import GeminiProvider
from interview_coach.ai.providers.openai_provider import OpenAIProvider


def get_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model, temperature=cfg.temperature)

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, temperature=cfg.temperature)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
