# app/api/timesheets.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user, role_required
from app.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.database import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.timesheet import (
    ApproveTimesheet,
    RejectTimesheet,
    TimesheetCreate,
    TimesheetDeletedOut,
    TimesheetListOut,
    TimesheetOut,
    TimesheetUpdate,
)
from app.services import timesheet_service

router = APIRouter(prefix="/timesheets", tags=["Timesheets"])


@router.post("", response_model=TimesheetOut, status_code=status.HTTP_201_CREATED)
def create_timesheet(
    data: TimesheetCreate,
    current_user: User = Depends(role_required(UserRole.CONTRACTOR)),
    db: Session = Depends(get_db),
):
    """Submit a timesheet for a week (contractor only). One timesheet per contractor and week."""
    return timesheet_service.create_timesheet(data, current_user, db)


@router.get("", response_model=TimesheetListOut)
def list_timesheets(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """
    Timesheets visible to the caller, newest first:
      - admin: all
      - recruiter: managed contractors only
      - contractor: own only
    """
    return timesheet_service.list_accessible_timesheets(db, current_user, page=page, limit=limit)


@router.get("/{timesheet_id}", response_model=TimesheetOut)
def get_timesheet(
    timesheet_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return timesheet_service.get_timesheet(timesheet_id, current_user, db)


@router.patch("/{timesheet_id}", response_model=TimesheetOut)
def update_timesheet(
    timesheet_id: int,
    data: TimesheetUpdate,
    current_user: User = Depends(role_required(UserRole.CONTRACTOR)),
    db: Session = Depends(get_db),
):
    """Edit a pending timesheet you own."""
    return timesheet_service.update_timesheet(timesheet_id, data, current_user, db)


@router.patch("/{timesheet_id}/approve", response_model=TimesheetOut)
def approve_timesheet(
    timesheet_id: int,
    data: ApproveTimesheet,
    current_user: User = Depends(role_required(UserRole.RECRUITER)),
    db: Session = Depends(get_db),
):
    return timesheet_service.approve_timesheet(timesheet_id, data.notes, current_user, db)


@router.patch("/{timesheet_id}/reject", response_model=TimesheetOut)
def reject_timesheet(
    timesheet_id: int,
    data: RejectTimesheet,
    current_user: User = Depends(role_required(UserRole.RECRUITER)),
    db: Session = Depends(get_db),
):
    return timesheet_service.reject_timesheet(timesheet_id, data.rejection_reason, current_user, db)


@router.delete("/{timesheet_id}", response_model=TimesheetDeletedOut)
def delete_timesheet(
    timesheet_id: int,
    current_user: User = Depends(role_required(UserRole.CONTRACTOR)),
    db: Session = Depends(get_db),
):
    """Delete a pending timesheet you own. Removal is permanent."""
    timesheet_service.delete_timesheet(timesheet_id, current_user, db)
    return TimesheetDeletedOut(id=timesheet_id, deleted=True)
