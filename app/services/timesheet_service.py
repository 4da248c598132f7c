# app/services/timesheet_service.py
import logging
import math
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateWeekError, ForbiddenError, NotFoundError, ValidationError
from app.models.enums import TimesheetStatus
from app.models.timesheet import Timesheet
from app.models.user import User
from app.schemas.timesheet import TimesheetCreate, TimesheetUpdate
from app.services.timesheet_policy import TimesheetAction, can_act, ensure_pending, visibility_clause

logger = logging.getLogger("timesheets.services.timesheet_service")

# Columns that may not be cleared by a PATCH carrying an explicit null
_REQUIRED_FIELDS = {"project_name", "hours_worked", "week_start_date", "week_end_date"}

_DENIED = {
    TimesheetAction.READ: "You can only access timesheets you own or contractors you manage",
    TimesheetAction.UPDATE: "You can only update your own timesheets",
    TimesheetAction.DELETE: "You can only delete your own timesheets",
    TimesheetAction.APPROVE: "Only recruiters managing this contractor can approve the timesheet",
    TimesheetAction.REJECT: "Only recruiters managing this contractor can reject the timesheet",
}


def _week_taken(db: Session, contractor_id: int, week_start, week_end, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Timesheet.id).filter(
        Timesheet.contractor_id == contractor_id,
        Timesheet.week_start_date == week_start,
        Timesheet.week_end_date == week_end,
    )
    if exclude_id is not None:
        q = q.filter(Timesheet.id != exclude_id)
    return q.first() is not None


def _commit(db: Session) -> None:
    # The unique constraint catches a concurrent insert that slipped past the pre-check
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateWeekError()


def _authorize(timesheet: Timesheet, caller: User, action: TimesheetAction) -> None:
    if not can_act(caller, timesheet, action):
        logger.warning(f"user={caller.id} denied {action.value} on timesheet={timesheet.id}")
        raise ForbiddenError(_DENIED[action])


def _load(db: Session, timesheet_id: int) -> Timesheet:
    timesheet = db.get(Timesheet, timesheet_id)
    if timesheet is None:
        raise NotFoundError("Timesheet", timesheet_id)
    return timesheet


def create_timesheet(data: TimesheetCreate, caller: User, db: Session) -> Timesheet:
    logger.info(f"Creating timesheet for contractor {caller.id}")

    if _week_taken(db, caller.id, data.week_start_date, data.week_end_date):
        raise DuplicateWeekError()

    timesheet = Timesheet(**data.model_dump(), contractor_id=caller.id, status=TimesheetStatus.PENDING)
    db.add(timesheet)
    _commit(db)
    db.refresh(timesheet)
    return timesheet


def list_accessible_timesheets(db: Session, caller: User, page: int = 1, limit: int = 10) -> Dict[str, object]:
    """
    Returns a page of the timesheets `caller` may read, newest first:
      - admin: all
      - recruiter: timesheets of managed contractors
      - contractor: own timesheets
    """
    base = db.query(Timesheet).filter(visibility_clause(caller))

    total = base.count()
    items = (
        base
        .order_by(desc(Timesheet.created_at), desc(Timesheet.id))
        .limit(limit)
        .offset((page - 1) * limit)
        .all()
    )

    logger.info(f"Retrieved {len(items)} timesheets for user {caller.email} (page {page})")
    return {
        "items": items,
        "total": int(total),
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if total else 0,
    }


def get_timesheet(timesheet_id: int, caller: User, db: Session) -> Timesheet:
    timesheet = _load(db, timesheet_id)
    _authorize(timesheet, caller, TimesheetAction.READ)
    return timesheet


def update_timesheet(timesheet_id: int, data: TimesheetUpdate, caller: User, db: Session) -> Timesheet:
    timesheet = _load(db, timesheet_id)
    _authorize(timesheet, caller, TimesheetAction.UPDATE)
    ensure_pending(timesheet, TimesheetAction.UPDATE)

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field not in _REQUIRED_FIELDS
    }

    week_start = changes.get("week_start_date", timesheet.week_start_date)
    week_end = changes.get("week_end_date", timesheet.week_end_date)
    if week_start > week_end:
        raise ValidationError("week_start_date must not be after week_end_date", field="week_start_date")

    week_changed = (week_start, week_end) != (timesheet.week_start_date, timesheet.week_end_date)
    if week_changed and _week_taken(db, timesheet.contractor_id, week_start, week_end, exclude_id=timesheet.id):
        raise DuplicateWeekError()

    logger.info(f"Updating timesheet {timesheet_id} by contractor {caller.id}: {sorted(changes)}")
    for field, value in changes.items():
        setattr(timesheet, field, value)
    _commit(db)
    db.refresh(timesheet)
    return timesheet


def approve_timesheet(timesheet_id: int, notes: Optional[str], caller: User, db: Session) -> Timesheet:
    timesheet = _load(db, timesheet_id)
    _authorize(timesheet, caller, TimesheetAction.APPROVE)
    ensure_pending(timesheet, TimesheetAction.APPROVE)

    logger.info(f"Approving timesheet {timesheet_id} by recruiter {caller.id}")
    timesheet.status = TimesheetStatus.APPROVED
    timesheet.approved_by = caller.id
    timesheet.approved_at = datetime.now(timezone.utc)
    if notes:
        timesheet.notes = notes
    db.commit()
    db.refresh(timesheet)
    return timesheet


def reject_timesheet(timesheet_id: int, rejection_reason: Optional[str], caller: User, db: Session) -> Timesheet:
    timesheet = _load(db, timesheet_id)
    _authorize(timesheet, caller, TimesheetAction.REJECT)
    ensure_pending(timesheet, TimesheetAction.REJECT)

    logger.info(f"Rejecting timesheet {timesheet_id} by recruiter {caller.id}")
    timesheet.status = TimesheetStatus.REJECTED
    timesheet.rejection_reason = rejection_reason
    db.commit()
    db.refresh(timesheet)
    return timesheet


def delete_timesheet(timesheet_id: int, caller: User, db: Session) -> None:
    timesheet = _load(db, timesheet_id)
    _authorize(timesheet, caller, TimesheetAction.DELETE)
    ensure_pending(timesheet, TimesheetAction.DELETE)

    logger.info(f"Deleting timesheet {timesheet_id} by contractor {caller.id}")
    db.delete(timesheet)
    db.commit()
