"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    approval,
    callbacks,
    documents,
    generation,
    health,
    journey,
    questionnaire,
    storage,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(generation.router, prefix="/assessments", tags=["generation"])
api_router.include_router(approval.router, prefix="/assessments", tags=["approval"])
api_router.include_router(
    questionnaire.router, prefix="/assessments", tags=["questionnaire"]
)
api_router.include_router(
    documents.assessment_router, prefix="/assessments", tags=["documents"]
)
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(journey.router, prefix="/assessments", tags=["journey"])
api_router.include_router(callbacks.router, prefix="/callbacks", tags=["callbacks"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
