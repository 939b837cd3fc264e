"""Initial schema - 6 tables + indexes.

Revision ID: 001
Revises: None
Create Date: 2026-10-16
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TIMESTAMPED_TABLES = [
    "users", "workspaces", "analytics_reports", "content_pieces", "content_approvals",
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # --- ENUM types ---
    user_role = sa.Enum("admin", "editor", "writer", "viewer", name="user_role")
    report_type = sa.Enum("linkedin", "youtube", "newsletter", "lead-magnet", name="report_type")
    content_status = sa.Enum("idea", "draft", "review", "approved", "published", name="content_status")

    # --- 1. users ---
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # --- 2. workspaces ---
    op.create_table(
        "workspaces",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("brand_name", sa.String(200), nullable=True),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )

    # --- 3. workspace_members ---
    op.create_table(
        "workspace_members",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("workspace_id", UUID(as_uuid=True), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "workspace_id", name="uq_workspace_member"),
    )

    # --- 4. analytics_reports ---
    op.create_table(
        "analytics_reports",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("workspace_id", UUID(as_uuid=True), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("report_name", sa.String(255), nullable=False),
        sa.Column("report_type", report_type, nullable=False),
        sa.Column("data_source", sa.String(50), nullable=False, server_default=sa.text("'csv_upload'")),
        sa.Column("csv_data", JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("raw_csv_text", sa.Text, nullable=True),
        sa.Column("metadata", JSONB, nullable=True),
        sa.Column("date_range_start", sa.Date, nullable=True),
        sa.Column("date_range_end", sa.Date, nullable=True),
        *_timestamps(),
    )

    # --- 5. content_pieces ---
    op.create_table(
        "content_pieces",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("workspace_id", UUID(as_uuid=True), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("body", sa.Text, nullable=True),
        sa.Column("platform", sa.String(50), nullable=False),
        sa.Column("status", content_status, nullable=False, server_default=sa.text("'idea'")),
        sa.Column("tags", JSONB, nullable=True),
        sa.Column("source_ids", JSONB, nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )

    # --- 6. content_approvals ---
    op.create_table(
        "content_approvals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column(
            "content_id", UUID(as_uuid=True),
            sa.ForeignKey("content_pieces.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("from_status", content_status, nullable=False),
        sa.Column("to_status", content_status, nullable=False),
        sa.Column("reviewer_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("is_urgent", sa.Boolean, server_default=sa.text("false")),
        *_timestamps(),
    )

    # --- Indexes ---
    op.create_index("idx_member_user", "workspace_members", ["user_id"])
    op.create_index("idx_reports_workspace", "analytics_reports", ["workspace_id"])
    op.create_index("idx_reports_owner_created", "analytics_reports", ["workspace_id", "user_id", "created_at"])
    op.create_index("idx_content_workspace", "content_pieces", ["workspace_id"])
    op.create_index("idx_content_workspace_status", "content_pieces", ["workspace_id", "status"])
    op.create_index("idx_approval_content", "content_approvals", ["content_id", "created_at"])

    # updated_at auto-update trigger
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    for table in _TIMESTAMPED_TABLES:
        op.execute(f"""
            CREATE TRIGGER trigger_update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    for table in _TIMESTAMPED_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS trigger_update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    for table in [
        "content_approvals", "content_pieces", "analytics_reports",
        "workspace_members", "workspaces", "users",
    ]:
        op.drop_table(table)

    for enum in ["content_status", "report_type", "user_role"]:
        op.execute(f"DROP TYPE IF EXISTS {enum}")
