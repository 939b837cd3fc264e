"""Knowledge sources table.

Revision ID: 002
Revises: 001
Create Date: 2026-10-16
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "content_sources",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("workspace_id", UUID(as_uuid=True), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default=sa.text("'text'")),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("insights", JSONB, nullable=True),
        sa.Column("tags", JSONB, nullable=True),
        sa.Column("related_topics", JSONB, nullable=True),
        sa.Column("source", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_sources_workspace_created", "content_sources", ["workspace_id", "created_at"])

    # update_updated_at_column() is created in 001
    op.execute("""
        CREATE TRIGGER trigger_update_content_sources_updated_at
        BEFORE UPDATE ON content_sources
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trigger_update_content_sources_updated_at ON content_sources")
    op.drop_index("idx_sources_workspace_created", table_name="content_sources")
    op.drop_table("content_sources")
