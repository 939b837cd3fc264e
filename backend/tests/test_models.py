"""ORM model definition tests."""
from contentops.models import (
    STATUS_FLOW,
    AnalyticsReport,
    Base,
    ContentApproval,
    ContentPiece,
    ContentSource,
    ContentStatus,
    ReportType,
    User,
    UserRole,
    Workspace,
    WorkspaceMember,
)


def test_all_tables_registered():
    table_names = set(Base.metadata.tables.keys())
    expected = {
        "users", "workspaces", "workspace_members",
        "analytics_reports", "content_pieces", "content_approvals", "content_sources",
    }
    assert expected == table_names


def test_user_role_enum():
    assert UserRole.ADMIN.value == "admin"
    assert UserRole.EDITOR.value == "editor"
    assert UserRole.WRITER.value == "writer"
    assert UserRole.VIEWER.value == "viewer"


def test_content_status_flow_order():
    assert [s.value for s in STATUS_FLOW] == ["idea", "draft", "review", "approved", "published"]
    assert set(STATUS_FLOW) == set(ContentStatus)


def test_report_type_enum():
    assert ReportType("linkedin") is ReportType.LINKEDIN
    assert ReportType("youtube") is ReportType.YOUTUBE
    assert ReportType("newsletter") is ReportType.NEWSLETTER
    assert ReportType("lead-magnet") is ReportType.LEAD_MAGNET


def test_table_columns_analytics_reports():
    cols = {c.name for c in AnalyticsReport.__table__.columns}
    expected = {
        "id", "workspace_id", "user_id", "report_name", "report_type", "data_source",
        "csv_data", "raw_csv_text", "metadata", "date_range_start", "date_range_end",
        "created_at", "updated_at",
    }
    assert expected == cols


def test_table_columns_content_pieces():
    cols = {c.name for c in ContentPiece.__table__.columns}
    expected = {
        "id", "workspace_id", "title", "body", "platform", "status", "tags", "source_ids",
        "approved_at", "approved_by", "published_at", "created_by", "created_at", "updated_at",
    }
    assert expected == cols


def test_table_columns_content_sources():
    cols = {c.name for c in ContentSource.__table__.columns}
    expected = {
        "id", "workspace_id", "user_id", "type", "title", "content", "summary", "insights",
        "tags", "related_topics", "source", "created_at", "updated_at",
    }
    assert expected == cols


def test_table_columns_users():
    cols = {c.name for c in User.__table__.columns}
    expected = {"id", "email", "password_hash", "name", "role", "is_active", "last_login_at", "created_at", "updated_at"}
    assert expected == cols


def test_workspace_scoped_tables_reference_workspaces():
    for model in (AnalyticsReport, ContentPiece, ContentSource):
        fks = {fk.target_fullname for fk in model.__table__.c.workspace_id.foreign_keys}
        assert fks == {"workspaces.id"}
        assert model.__table__.c.workspace_id.index is True


def test_membership_unique_per_user_and_workspace():
    constraints = {c.name for c in WorkspaceMember.__table__.constraints}
    assert "uq_workspace_member" in constraints
    assert Workspace.__table__.c.owner_id.nullable is False


def test_approval_cascades_with_content():
    fk = next(iter(ContentApproval.__table__.c.content_id.foreign_keys))
    assert fk.ondelete == "CASCADE"
