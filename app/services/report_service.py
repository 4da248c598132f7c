# app/services/report_service.py
import csv
import io
import json
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ValidationError
from app.models.timesheet import Timesheet

logger = logging.getLogger("timesheets.services.report_service")

EXPORT_FORMATS = ("csv", "json")

# (CSV header, record key)
EXPORT_COLUMNS = [
    ("ID", "id"),
    ("Contractor Name", "contractor_name"),
    ("Contractor Email", "contractor_email"),
    ("Project Name", "project_name"),
    ("Hours Worked", "hours_worked"),
    ("Notes", "notes"),
    ("Week Start Date", "week_start_date"),
    ("Week End Date", "week_end_date"),
    ("Status", "status"),
    ("Approved By", "approved_by"),
    ("Approved At", "approved_at"),
    ("Rejection Reason", "rejection_reason"),
    ("Created At", "created_at"),
    ("Updated At", "updated_at"),
]


def _format_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def flatten_timesheet(timesheet: Timesheet) -> Dict[str, Any]:
    """Projects a timesheet into an export record, contractor name/email in place of the FK."""
    contractor = timesheet.contractor
    return {
        "id": timesheet.id,
        "contractor_name": contractor.full_name,
        "contractor_email": contractor.email,
        "project_name": timesheet.project_name,
        "hours_worked": float(timesheet.hours_worked),
        "notes": timesheet.notes,
        "week_start_date": _format_date(timesheet.week_start_date),
        "week_end_date": _format_date(timesheet.week_end_date),
        "status": timesheet.status.value,
        "approved_by": timesheet.approved_by,
        "approved_at": _format_datetime(timesheet.approved_at),
        "rejection_reason": timesheet.rejection_reason,
        "created_at": _format_datetime(timesheet.created_at),
        "updated_at": _format_datetime(timesheet.updated_at),
    }


def export_as_json(records: List[Dict[str, Any]]) -> str:
    return json.dumps(records, indent=2)


def export_as_csv(records: List[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([header for header, _ in EXPORT_COLUMNS])
    for record in records:
        writer.writerow(["" if record[key] is None else record[key] for _, key in EXPORT_COLUMNS])
    return buffer.getvalue()


def export_timesheets(db: Session, fmt: str = "csv") -> str:
    """
    Reads every timesheet with its contractor (newest first) and renders it as CSV or JSON.
    Read-only: nothing is written back.
    """
    fmt = (fmt or "csv").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}", field="format")

    logger.info(f"Exporting timesheets in {fmt.upper()} format")

    timesheets = (
        db.query(Timesheet)
        .options(joinedload(Timesheet.contractor))
        .order_by(desc(Timesheet.created_at), desc(Timesheet.id))
        .all()
    )
    records = [flatten_timesheet(t) for t in timesheets]

    if fmt == "json":
        return export_as_json(records)
    return export_as_csv(records)
