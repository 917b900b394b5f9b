"""Approval use cases: manual and automatic approval of generated requirements."""

from app.application.use_cases.approval.approval_gate import ApprovalGate

__all__ = ["ApprovalGate"]
