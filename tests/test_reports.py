"""Export formats and the admin-only download endpoint."""
import csv
import io
import json
from datetime import date, datetime, timezone

import pytest

from app.core.errors import ValidationError
from app.models.enums import TimesheetStatus
from app.services.report_service import EXPORT_COLUMNS, export_timesheets


@pytest.fixture
def reviewed(make_timesheet, users):
    """One approved and one rejected timesheet with awkward free text."""
    approved_id = make_timesheet(
        users["contractor1"],
        project_name='Website "v2", phase 1',
        notes="Auth module, payments",
        status=TimesheetStatus.APPROVED,
        approved_by=users["recruiter"],
        approved_at=datetime(2024, 1, 8, 9, 30, tzinfo=timezone.utc),
    )
    rejected_id = make_timesheet(
        users["contractor2"],
        start=date(2024, 1, 8),
        end=date(2024, 1, 14),
        status=TimesheetStatus.REJECTED,
        rejection_reason='Too many "meetings"',
    )
    return approved_id, rejected_id


def test_json_export_flattens_every_field(db, reviewed, users):
    approved_id, rejected_id = reviewed
    records = json.loads(export_timesheets(db, "json"))

    assert [r["id"] for r in records] == [rejected_id, approved_id]
    approved = records[1]
    assert approved == {
        "id": approved_id,
        "contractor_name": "John Contractor",
        "contractor_email": "c1@example.com",
        "project_name": 'Website "v2", phase 1',
        "hours_worked": 40.0,
        "notes": "Auth module, payments",
        "week_start_date": "2024-01-01",
        "week_end_date": "2024-01-07",
        "status": "approved",
        "approved_by": users["recruiter"],
        "approved_at": approved["approved_at"],
        "rejection_reason": None,
        "created_at": approved["created_at"],
        "updated_at": approved["updated_at"],
    }
    assert approved["approved_at"].startswith("2024-01-08T09:30:00")
    assert "contractor_id" not in approved
    assert records[0]["approved_at"] is None


def test_csv_export_quotes_embedded_commas_and_quotes(db, reviewed):
    text = export_timesheets(db, "csv")
    rows = list(csv.reader(io.StringIO(text)))

    assert rows[0] == [header for header, _ in EXPORT_COLUMNS]
    assert len(rows) == 3
    approved = rows[2]
    assert approved[3] == 'Website "v2", phase 1'
    assert approved[5] == "Auth module, payments"
    assert approved[6] == "2024-01-01"
    assert approved[11] == ""
    assert rows[1][11] == 'Too many "meetings"'
    assert '"Website ""v2"", phase 1"' in text


def test_csv_export_of_empty_store_is_header_only(db):
    assert export_timesheets(db, "csv").strip().split("\n") == [",".join(h for h, _ in EXPORT_COLUMNS)]


def test_unknown_format_is_rejected(db):
    with pytest.raises(ValidationError):
        export_timesheets(db, "xml")


def test_export_endpoint_serves_attachment(client, auth_headers, reviewed):
    res = client.get("/reports/export?format=json", headers=auth_headers("admin"))

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/json")
    today = datetime.now(timezone.utc).date().isoformat()
    assert res.headers["content-disposition"] == f'attachment; filename="timesheets-export-{today}.json"'
    assert len(res.json()) == 2


def test_export_defaults_to_csv(client, auth_headers, reviewed):
    res = client.get("/reports/export", headers=auth_headers("admin"))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert res.headers["content-disposition"].endswith('.csv"')


@pytest.mark.parametrize("who", ["recruiter", "contractor1"])
def test_export_is_admin_only(client, auth_headers, who):
    assert client.get("/reports/export", headers=auth_headers(who)).status_code == 403


def test_export_endpoint_rejects_unknown_format(client, auth_headers):
    assert client.get("/reports/export?format=xml", headers=auth_headers("admin")).status_code == 400
