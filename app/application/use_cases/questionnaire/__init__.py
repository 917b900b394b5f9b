"""Questionnaire use cases: read, save answer (upsert), submit."""

from app.application.use_cases.questionnaire.questionnaire_service import (
    QuestionnaireService,
)

__all__ = ["QuestionnaireService"]
