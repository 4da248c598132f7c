from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime
from app.models.enums import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: UserRole = UserRole.CONTRACTOR
    keycloak_id: Optional[str] = None
    is_active: bool = True
    managed_contractor_ids: List[int] = []


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    keycloak_id: Optional[str] = None
    is_active: Optional[bool] = None
    managed_contractor_ids: Optional[List[int]] = None


class UserLogin(BaseModel):
    email: EmailStr
    # Accepted but not verified: identity is delegated to the external provider
    password: Optional[str] = None


class UserSummary(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    role: UserRole

    class Config:
        from_attributes = True


class UserOut(UserSummary):
    keycloak_id: Optional[str] = None
    is_active: bool
    managed_contractor_ids: List[int] = []
    created_at: datetime
    updated_at: datetime


class UserListOut(BaseModel):
    items: List[UserOut]
    total: int
    page: int
    limit: int
    total_pages: int


class LoginOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary
