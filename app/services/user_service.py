# app/services/user_service.py
import logging
import math
from typing import Dict, Iterable, List, Optional

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger("timesheets.services.user_service")


def _resolve_contractors(db: Session, contractor_ids: Iterable[int]) -> List[User]:
    """Loads the users behind `contractor_ids`; every one must exist and be a contractor."""
    ids = sorted(set(contractor_ids))
    if not ids:
        return []
    users = db.query(User).filter(User.id.in_(ids)).all()
    found = {u.id: u for u in users}

    missing = [i for i in ids if i not in found]
    if missing:
        raise ValidationError(f"Unknown contractor ids: {missing}", field="managed_contractor_ids")
    not_contractors = [u.id for u in users if u.role != UserRole.CONTRACTOR]
    if not_contractors:
        raise ValidationError(
            f"Only contractors can be managed; users {sorted(not_contractors)} are not contractors",
            field="managed_contractor_ids",
        )
    return [found[i] for i in ids]


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    q = db.query(User.id).filter(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first() is not None:
        raise ConflictError(f"User with email {email} already exists")


def create_user(data: UserCreate, db: Session) -> User:
    logger.info(f"Creating user with email: {data.email}")
    _ensure_email_free(db, data.email)

    if data.managed_contractor_ids and data.role != UserRole.RECRUITER:
        raise ValidationError("Only recruiters can manage contractors", field="managed_contractor_ids")

    user = User(**data.model_dump(exclude={"managed_contractor_ids"}))
    user.managed_contractors = _resolve_contractors(db, data.managed_contractor_ids)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def list_users(db: Session, page: int = 1, limit: int = 10) -> Dict[str, object]:
    base = db.query(User)

    total = base.count()
    items = (
        base
        .order_by(desc(User.created_at), desc(User.id))
        .limit(limit)
        .offset((page - 1) * limit)
        .all()
    )
    logger.info(f"Retrieved {len(items)} users (page {page})")
    return {
        "items": items,
        "total": int(total),
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if total else 0,
    }


def get_user(user_id: int, db: Session) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def find_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.lower()).one_or_none()


def list_managed_contractors(recruiter_id: int, db: Session) -> List[User]:
    recruiter = get_user(recruiter_id, db)
    if recruiter.role != UserRole.RECRUITER:
        raise ValidationError(f"User {recruiter_id} is not a recruiter")
    return sorted(recruiter.managed_contractors, key=lambda u: u.id)


def update_user(user_id: int, data: UserUpdate, db: Session) -> User:
    user = get_user(user_id, db)
    changes = data.model_dump(exclude_unset=True)
    logger.info(f"Updating user with ID: {user_id}: {sorted(changes)}")

    if changes.get("email"):
        _ensure_email_free(db, changes["email"], exclude_id=user.id)

    new_role = changes.get("role")
    if new_role is not None and new_role != UserRole.CONTRACTOR and user.recruiters:
        raise ValidationError(
            f"User {user_id} is managed by recruiters {sorted(r.id for r in user.recruiters)}; unassign first",
            field="role",
        )

    contractor_ids = changes.pop("managed_contractor_ids", None)
    for field, value in changes.items():
        if value is None and field != "keycloak_id":
            continue
        setattr(user, field, value)

    if contractor_ids is not None:
        user.managed_contractors = _resolve_contractors(db, contractor_ids)
    if user.managed_contractors and user.role != UserRole.RECRUITER:
        db.rollback()
        raise ValidationError("Only recruiters can manage contractors", field="managed_contractor_ids")

    db.commit()
    db.refresh(user)
    return user


def delete_user(user_id: int, db: Session) -> None:
    user = get_user(user_id, db)
    logger.info(f"Removing user with ID: {user_id}")
    db.delete(user)
    db.commit()
