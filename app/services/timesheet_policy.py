# app/services/timesheet_policy.py
"""
Authorization and state rules for the timesheet lifecycle.

Every role / ownership / management decision goes through `can_act`, so the
service layer never re-derives who may touch a timesheet. Status rules live
next to it in `ensure_pending`.

    PENDING --approve--> APPROVED   (terminal)
    PENDING --reject---> REJECTED   (terminal)
"""
from enum import Enum

from sqlalchemy import select, true

from app.core.errors import InvalidStateError
from app.models.enums import UserRole
from app.models.timesheet import Timesheet
from app.models.user import User, recruiter_contractors


class TimesheetAction(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"


_OWNER_ACTIONS = {TimesheetAction.UPDATE, TimesheetAction.DELETE}
_REVIEW_ACTIONS = {TimesheetAction.APPROVE, TimesheetAction.REJECT}

_VERB = {
    TimesheetAction.UPDATE: "updated",
    TimesheetAction.DELETE: "deleted",
    TimesheetAction.APPROVE: "approved",
    TimesheetAction.REJECT: "rejected",
}


def _manages(caller: User, contractor_id: int) -> bool:
    return caller.role == UserRole.RECRUITER and contractor_id in caller.managed_contractor_ids


def can_act(caller: User, timesheet: Timesheet, action: TimesheetAction) -> bool:
    """
    Returns True when `caller` may perform `action` on `timesheet`.

      - read:            admin always, recruiter for managed contractors, contractor for own
      - update/delete:   owning contractor only
      - approve/reject:  recruiter managing the owning contractor
    """
    if not caller.is_active:
        return False

    if action == TimesheetAction.READ:
        if caller.role == UserRole.ADMIN:
            return True
        if caller.role == UserRole.CONTRACTOR:
            return timesheet.contractor_id == caller.id
        return _manages(caller, timesheet.contractor_id)

    if action in _OWNER_ACTIONS:
        return caller.role == UserRole.CONTRACTOR and timesheet.contractor_id == caller.id

    if action in _REVIEW_ACTIONS:
        return _manages(caller, timesheet.contractor_id)

    return False


def ensure_pending(timesheet: Timesheet, action: TimesheetAction) -> None:
    """Raises InvalidStateError unless the timesheet can still change."""
    if not timesheet.is_editable:
        raise InvalidStateError(
            f"Only pending timesheets can be {_VERB.get(action, action.value)} "
            f"(timesheet {timesheet.id} is {timesheet.status.value})"
        )


def visibility_clause(caller: User):
    """SQL predicate matching the timesheets `caller` is allowed to read."""
    if caller.role == UserRole.ADMIN:
        return true()
    if caller.role == UserRole.CONTRACTOR:
        return Timesheet.contractor_id == caller.id
    managed = select(recruiter_contractors.c.contractor_id).where(
        recruiter_contractors.c.recruiter_id == caller.id
    )
    return Timesheet.contractor_id.in_(managed)
