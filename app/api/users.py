# app/api/users.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import role_required
from app.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.database import get_db
from app.models.enums import UserRole
from app.schemas.user import UserCreate, UserListOut, UserOut, UserUpdate
from app.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])

admin_only = role_required(UserRole.ADMIN)
admin_or_recruiter = role_required(UserRole.ADMIN, UserRole.RECRUITER)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, _=Depends(admin_only), db: Session = Depends(get_db)):
    return user_service.create_user(data, db)


@router.get("", response_model=UserListOut)
def list_users(
    _=Depends(admin_or_recruiter),
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    return user_service.list_users(db, page=page, limit=limit)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, _=Depends(admin_or_recruiter), db: Session = Depends(get_db)):
    return user_service.get_user(user_id, db)


@router.get("/{user_id}/contractors", response_model=List[UserOut])
def list_managed_contractors(user_id: int, _=Depends(admin_or_recruiter), db: Session = Depends(get_db)):
    """Contractors managed by the given recruiter."""
    return user_service.list_managed_contractors(user_id, db)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: int, data: UserUpdate, _=Depends(admin_only), db: Session = Depends(get_db)):
    return user_service.update_user(user_id, data, db)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, _=Depends(admin_only), db: Session = Depends(get_db)):
    """Deletes the user together with the timesheets they own."""
    user_service.delete_user(user_id, db)
