# app/services/auth_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.user import User
from app.services.user_service import find_by_email

logger = logging.getLogger("timesheets.services.auth_service")


def authenticate_user(email: str, password: Optional[str], db: Session) -> Optional[User]:
    """
    Resolves an active user by email.

    Credentials are owned by the external identity provider; this deployment
    accepts any password, so only existence and the active flag are checked.
    """
    logger.info(f"Login attempt for email: {email}")
    user = find_by_email(email, db)
    if user is None or not user.is_active:
        logger.warning(f"Login failed for email: {email}")
        return None
    logger.info(f"Login successful for user: {user.email}")
    return user
