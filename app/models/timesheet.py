from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.enums import TimesheetStatus
from app.models.user import utcnow


class Timesheet(Base):
    __tablename__ = "timesheets"
    __table_args__ = (
        UniqueConstraint("contractor_id", "week_start_date", "week_end_date", name="uq_timesheet_contractor_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    contractor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_name = Column(String, nullable=False)
    hours_worked = Column(Numeric(5, 2), nullable=False)
    notes = Column(Text, nullable=True)
    week_start_date = Column(Date, nullable=False)
    week_end_date = Column(Date, nullable=False)
    status = Column(Enum(TimesheetStatus), nullable=False, default=TimesheetStatus.PENDING)
    approved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    contractor = relationship("User", back_populates="timesheets", foreign_keys=[contractor_id])

    @property
    def is_editable(self) -> bool:
        return self.status == TimesheetStatus.PENDING
