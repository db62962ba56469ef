from .api import CoachApiClient

__all__ = ["CoachApiClient"]
