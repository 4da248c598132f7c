from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.models.enums import TimesheetStatus


class TimesheetCreate(BaseModel):
    project_name: str = Field(..., min_length=1, examples=["E-commerce Website Development"])
    hours_worked: Decimal = Field(..., gt=0, le=168, decimal_places=2, examples=[40.5])
    notes: Optional[str] = None
    week_start_date: date = Field(..., examples=["2024-01-01"])
    week_end_date: date = Field(..., examples=["2024-01-07"])

    @model_validator(mode="after")
    def check_week_range(self):
        if self.week_start_date > self.week_end_date:
            raise ValueError("week_start_date must not be after week_end_date")
        return self


class TimesheetUpdate(BaseModel):
    project_name: Optional[str] = Field(None, min_length=1)
    hours_worked: Optional[Decimal] = Field(None, gt=0, le=168, decimal_places=2)
    notes: Optional[str] = None
    week_start_date: Optional[date] = None
    week_end_date: Optional[date] = None


class ApproveTimesheet(BaseModel):
    notes: Optional[str] = Field(None, examples=["Approved - good work this week"])


class RejectTimesheet(BaseModel):
    rejection_reason: Optional[str] = Field(None, examples=["Hours seem excessive for the tasks described"])


class TimesheetOut(BaseModel):
    id: int
    contractor_id: int
    project_name: str
    hours_worked: float
    notes: Optional[str] = None
    week_start_date: date
    week_end_date: date
    status: TimesheetStatus
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TimesheetListOut(BaseModel):
    items: List[TimesheetOut]
    total: int
    page: int
    limit: int
    total_pages: int


class TimesheetDeletedOut(BaseModel):
    id: int
    deleted: bool
