"""initial_schema_assessment_generation_questionnaire_documents

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 09:12:41.518203

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _assessment_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["assessment_id"], ["assessment.id"], ondelete="CASCADE"
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "assessment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(), nullable=False),
        sa.Column("contact_email", sa.String(), nullable=True),
        sa.Column("prospect_created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("qualified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("has_report", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("report_delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("converted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "auto_approve_requirements",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.String(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "generation_job",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("assessment_id", sa.String(), nullable=False),
        sa.Column("state", sa.String(length=20), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("error_detail", sa.JSON(), nullable=True),
        sa.Column("questions_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("documents_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("retry_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("external_execution_id", sa.String(), nullable=True),
        *_timestamps(),
        _assessment_fk(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("assessment_id", name="uq_generation_job_assessment"),
        sa.CheckConstraint(
            "state IN ('not_started', 'running', 'completed', 'failed')",
            name="ck_generation_job_state",
        ),
    )
    op.create_index(
        op.f("ix_generation_job_assessment_id"),
        "generation_job",
        ["assessment_id"],
        unique=False,
    )

    op.create_table(
        "discovery_question",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("assessment_id", sa.String(), nullable=False),
        sa.Column("dimension_key", sa.String(), nullable=False),
        sa.Column("dimension_name", sa.String(), nullable=True),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column("answer_format", sa.String(length=20), nullable=False),
        sa.Column("options", sa.JSON(), nullable=True),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("confidence_impact", sa.String(length=10), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("evidence_type", sa.String(), nullable=True),
        *_timestamps(),
        _assessment_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_discovery_question_assessment_id"),
        "discovery_question",
        ["assessment_id"],
        unique=False,
    )
    op.create_index(
        "ix_discovery_question_assessment_order",
        "discovery_question",
        ["assessment_id", "dimension_key", "display_order"],
        unique=False,
    )

    op.create_table(
        "discovery_answer",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("assessment_id", sa.String(), nullable=False),
        sa.Column("discovery_question_id", sa.String(), nullable=False),
        sa.Column("answer_text", sa.Text(), nullable=True),
        sa.Column("answer_json", sa.JSON(), nullable=True),
        sa.Column("answered_by", sa.String(), nullable=True),
        *_timestamps(),
        _assessment_fk(),
        sa.ForeignKeyConstraint(
            ["discovery_question_id"], ["discovery_question.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("discovery_question_id"),
    )
    op.create_index(
        op.f("ix_discovery_answer_assessment_id"),
        "discovery_answer",
        ["assessment_id"],
        unique=False,
    )

    op.create_table(
        "document_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("assessment_id", sa.String(), nullable=False),
        sa.Column("dimension_key", sa.String(), nullable=True),
        sa.Column("document_type", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("why_needed", sa.Text(), nullable=True),
        sa.Column("accepted_formats", sa.JSON(), nullable=True),
        sa.Column("example_filenames", sa.JSON(), nullable=True),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("confidence_impact", sa.String(length=10), nullable=False),
        *_timestamps(),
        _assessment_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_document_request_assessment_id"),
        "document_request",
        ["assessment_id"],
        unique=False,
    )

    op.create_table(
        "document_upload",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("assessment_id", sa.String(), nullable=False),
        sa.Column("slot_key", sa.String(), nullable=False),
        sa.Column("document_request_id", sa.String(), nullable=True),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("file_type", sa.String(), nullable=False),
        sa.Column("storage_ref", sa.String(), nullable=False),
        sa.Column("uploaded_by", sa.String(length=20), nullable=False),
        *_timestamps(),
        _assessment_fk(),
        sa.ForeignKeyConstraint(
            ["document_request_id"], ["document_request.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_document_upload_assessment_id"),
        "document_upload",
        ["assessment_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_document_upload_document_request_id"),
        "document_upload",
        ["document_request_id"],
        unique=False,
    )
    op.create_index(
        "ix_document_upload_assessment_slot",
        "document_upload",
        ["assessment_id", "slot_key"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_document_upload_assessment_slot", table_name="document_upload")
    op.drop_index(op.f("ix_document_upload_document_request_id"), table_name="document_upload")
    op.drop_index(op.f("ix_document_upload_assessment_id"), table_name="document_upload")
    op.drop_table("document_upload")
    op.drop_index(op.f("ix_document_request_assessment_id"), table_name="document_request")
    op.drop_table("document_request")
    op.drop_index(op.f("ix_discovery_answer_assessment_id"), table_name="discovery_answer")
    op.drop_table("discovery_answer")
    op.drop_index(
        "ix_discovery_question_assessment_order", table_name="discovery_question"
    )
    op.drop_index(
        op.f("ix_discovery_question_assessment_id"), table_name="discovery_question"
    )
    op.drop_table("discovery_question")
    op.drop_index(op.f("ix_generation_job_assessment_id"), table_name="generation_job")
    op.drop_table("generation_job")
    op.drop_table("assessment")
