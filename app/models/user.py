from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.enums import UserRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# recruiter -> contractors they manage
recruiter_contractors = Table(
    "recruiter_contractors",
    Base.metadata,
    Column("recruiter_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("contractor_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.CONTRACTOR)
    keycloak_id = Column(String, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    managed_contractors = relationship(
        "User",
        secondary=recruiter_contractors,
        primaryjoin=id == recruiter_contractors.c.recruiter_id,
        secondaryjoin=id == recruiter_contractors.c.contractor_id,
        backref="recruiters",
    )
    timesheets = relationship(
        "Timesheet",
        back_populates="contractor",
        foreign_keys="Timesheet.contractor_id",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def managed_contractor_ids(self) -> set:
        return {c.id for c in self.managed_contractors}
