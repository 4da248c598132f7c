# app/api/reports.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.auth.dependencies import role_required
from app.database import get_db
from app.models.enums import UserRole
from app.services.report_service import export_timesheets

router = APIRouter(prefix="/reports", tags=["Reports"])

MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}


@router.get("/export")
def export(
    _=Depends(role_required(UserRole.ADMIN)),
    db: Session = Depends(get_db),
    format: str = Query("csv", pattern="^(csv|json)$", description="Export format"),
):
    """
    Download every timesheet as an attachment named timesheets-export-<YYYY-MM-DD>.<format>.
    """
    data = export_timesheets(db, format)
    filename = f"timesheets-export-{datetime.now(timezone.utc).date().isoformat()}.{format}"
    return Response(
        content=data,
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
