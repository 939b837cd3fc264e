"""Schema tests."""
import uuid

import pytest
from pydantic import ValidationError

from contentops.schemas.analytics import ChangeIndicator, ContentRanking, ReportCreate
from contentops.schemas.common import APIResponse, ErrorDetail, PaginationMeta
from contentops.schemas.content import ContentCreate


def test_api_response_success():
    resp = APIResponse(status="success", data={"id": "123"}, message="OK")
    assert resp.status == "success"
    assert resp.data == {"id": "123"}


def test_api_response_with_pagination():
    pagination = PaginationMeta(total=100, page=1, per_page=20, has_next=True)
    resp = APIResponse(status="success", data=[], pagination=pagination)
    assert resp.pagination is not None
    assert resp.pagination.total == 100
    assert resp.pagination.has_next is True


def test_pagination_for_page():
    assert PaginationMeta.for_page(41, 2, 20).has_next is True
    assert PaginationMeta.for_page(40, 2, 20).has_next is False


def test_error_detail():
    err = ErrorDetail(title="Not Found", status=404, detail="Report not found")
    assert err.type == "about:blank"
    assert err.status == 404


def test_analytics_defaults():
    assert ChangeIndicator().model_dump() == {"percent_change": "0", "is_positive": True}
    ranking = ContentRanking(title="Post", platform="linkedin", date="2024-01-01")
    assert ranking.engagement_rate == "0.00"


def test_report_create_rejects_unknown_type():
    with pytest.raises(ValidationError):
        ReportCreate(workspace_id=uuid.uuid4(), report_name="x", report_type="tiktok", csv_text="a\n1\n")


def test_content_create_defaults_to_idea():
    body = ContentCreate(workspace_id=uuid.uuid4(), title="Hook ideas", platform="linkedin")
    assert body.status.value == "idea"
    assert body.tags is None
