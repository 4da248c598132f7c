# app/seed.py
"""
Demo data: one admin, one recruiter managing two contractors, and a few
timesheets in every lifecycle state. Skipped when an admin already exists.

    python -m app.seed
"""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from app.models.enums import TimesheetStatus, UserRole
from app.models.timesheet import Timesheet
from app.models.user import User

logger = logging.getLogger("timesheets.seed")


def is_seeded(db: Session) -> bool:
    admins = db.query(User).filter(User.role == UserRole.ADMIN).count()
    return admins > 0


def seed_if_needed(db: Session) -> bool:
    """Inserts the demo data set; returns False when the database was already seeded."""
    if is_seeded(db):
        logger.info("Database already seeded, skipping...")
        return False

    logger.info("Starting database seeding...")

    admin = User(email="admin@example.com", first_name="Admin", last_name="User",
                 role=UserRole.ADMIN, keycloak_id="admin-keycloak-id")
    recruiter = User(email="recruiter@example.com", first_name="Jane", last_name="Recruiter",
                     role=UserRole.RECRUITER, keycloak_id="recruiter-keycloak-id")
    contractor1 = User(email="contractor1@example.com", first_name="John", last_name="Contractor",
                       role=UserRole.CONTRACTOR, keycloak_id="contractor1-keycloak-id")
    contractor2 = User(email="contractor2@example.com", first_name="Alice", last_name="Developer",
                       role=UserRole.CONTRACTOR, keycloak_id="contractor2-keycloak-id")
    recruiter.managed_contractors = [contractor1, contractor2]

    db.add_all([admin, recruiter, contractor1, contractor2])
    db.flush()
    logger.info("Users and recruiter-contractor relationships created")

    reviewed_at = datetime(2024, 1, 8, tzinfo=timezone.utc)
    db.add_all([
        Timesheet(
            contractor_id=contractor1.id,
            project_name="E-commerce Website Development",
            hours_worked=Decimal("40"),
            notes="Completed user authentication module and started payment integration",
            week_start_date=date(2024, 1, 1),
            week_end_date=date(2024, 1, 7),
            status=TimesheetStatus.APPROVED,
            approved_by=recruiter.id,
            approved_at=reviewed_at,
        ),
        Timesheet(
            contractor_id=contractor1.id,
            project_name="E-commerce Website Development",
            hours_worked=Decimal("38.5"),
            notes="Finished payment integration and worked on order management system",
            week_start_date=date(2024, 1, 8),
            week_end_date=date(2024, 1, 14),
            status=TimesheetStatus.PENDING,
        ),
        Timesheet(
            contractor_id=contractor2.id,
            project_name="Mobile App Development",
            hours_worked=Decimal("35"),
            notes="Developed user interface components and implemented navigation",
            week_start_date=date(2024, 1, 1),
            week_end_date=date(2024, 1, 7),
            status=TimesheetStatus.APPROVED,
            approved_by=recruiter.id,
            approved_at=reviewed_at,
        ),
        Timesheet(
            contractor_id=contractor2.id,
            project_name="Mobile App Development",
            hours_worked=Decimal("60"),
            notes="Integrated push notifications and offline storage",
            week_start_date=date(2024, 1, 8),
            week_end_date=date(2024, 1, 14),
            status=TimesheetStatus.REJECTED,
            rejection_reason="Hours seem excessive for the tasks described",
        ),
        Timesheet(
            contractor_id=contractor2.id,
            project_name="Mobile App Development",
            hours_worked=Decimal("32"),
            notes="Bug fixes and app store submission",
            week_start_date=date(2024, 1, 15),
            week_end_date=date(2024, 1, 21),
            status=TimesheetStatus.PENDING,
        ),
    ])
    db.commit()
    logger.info("Database seeding completed")
    return True


if __name__ == "__main__":
    from app.database import Base, SessionLocal, engine
    import app.models  # noqa: F401  registers all tables

    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_if_needed(session)
