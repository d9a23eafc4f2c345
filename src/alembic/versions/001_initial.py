"""Initial review schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_JSON = sa.JSON().with_variant(JSONB(), "postgresql")
_OPEN_ONLY = sa.text("status = 'open'")


def upgrade() -> None:
    op.create_table(
        "editors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_editors_email", "editors", ["email"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("editor_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("client_name", sa.String(length=100), nullable=False),
        sa.Column("client_email", sa.String(length=255), nullable=False),
        sa.Column("allowed_request_types", _JSON, nullable=False),
        sa.Column("revision_cap", sa.Integer(), nullable=False),
        sa.Column("revision_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("state", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("revision_cap >= 0", name="ck_projects_revision_cap_non_negative"),
        sa.CheckConstraint("revision_used >= 0", name="ck_projects_revision_used_non_negative"),
        sa.ForeignKeyConstraint(["editor_id"], ["editors.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_editor_id", "projects", ["editor_id"])

    op.create_table(
        "video_versions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("video_url", sa.String(length=2000), nullable=False),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=5000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "project_id", "version_number", name="uq_video_versions_project_number"
        ),
    )
    op.create_index("ix_video_versions_project_id", "video_versions", ["project_id"])

    op.create_table(
        "revision_rounds",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="open"),
        sa.Column("video_version_number", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_id", "round_number", name="uq_revision_rounds_project_number"),
    )
    op.create_index("ix_revision_rounds_project_id", "revision_rounds", ["project_id"])
    # At most one open round per project
    op.create_index(
        "uq_revision_rounds_one_open",
        "revision_rounds",
        ["project_id"],
        unique=True,
        postgresql_where=_OPEN_ONLY,
        sqlite_where=_OPEN_ONLY,
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("revision_round_id", sa.Uuid(), nullable=False),
        sa.Column("timestamp", sa.Float(), nullable=False),
        sa.Column("request_type", sa.String(length=50), nullable=False),
        sa.Column("note_text", sa.String(length=5000), nullable=False),
        sa.Column("client_marked_new_idea", sa.Boolean(), nullable=False),
        sa.Column("scope_status", sa.String(length=30), nullable=False),
        sa.Column("override_to", sa.String(length=30), nullable=True),
        sa.Column("override_reason", sa.String(length=1000), nullable=True),
        sa.Column("override_editor_id", sa.Uuid(), nullable=True),
        sa.Column("override_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["revision_round_id"], ["revision_rounds.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["override_editor_id"], ["editors.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_revision_round_id", "notes", ["revision_round_id"])

    op.create_table(
        "review_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("token", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_review_tokens_project_id", "review_tokens", ["project_id"])
    op.create_index("ix_review_tokens_token", "review_tokens", ["token"], unique=True)

    op.create_table(
        "activity_events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("editor_id", sa.Uuid(), nullable=True),
        sa.Column("event_type", sa.String(length=50), nullable=False),
        sa.Column("metadata", _JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["editor_id"], ["editors.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_events_project_id", "activity_events", ["project_id"])
    op.create_index(
        "ix_activity_events_project_created",
        "activity_events",
        ["project_id", "created_at"],
    )
    op.create_index(
        "ix_activity_events_type_created",
        "activity_events",
        ["event_type", "created_at"],
    )


def downgrade() -> None:
    op.drop_table("activity_events")
    op.drop_table("review_tokens")
    op.drop_table("notes")
    op.drop_table("revision_rounds")
    op.drop_table("video_versions")
    op.drop_table("projects")
    op.drop_table("editors")
