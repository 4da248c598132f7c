# Import ALL models once so they register on Base.metadata
from .user import User, recruiter_contractors
from .timesheet import Timesheet

__all__ = [
    "User", "recruiter_contractors",
    "Timesheet",
]
