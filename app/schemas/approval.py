"""Approval API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ApprovalResponse(BaseModel):
    """Approval record (approved_by is 'auto' for automatic approval)."""

    model_config = ConfigDict(from_attributes=True)

    approved_at: datetime
    approved_by: str
    is_auto: bool = False
