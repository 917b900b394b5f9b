"""Journey use cases (read-only, derived)."""

from app.application.use_cases.journey.get_journey import GetJourneyUseCase

__all__ = ["GetJourneyUseCase"]
