from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.core.security import create_access_token
from app.database import get_db
from app.models.user import User
from app.schemas.user import LoginOut, UserLogin, UserOut, UserSummary
from app.services.auth_service import authenticate_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginOut)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    db_user = authenticate_user(credentials.email, credentials.password, db)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # Include the user's role in the token
    access_token = create_access_token(
        user_id=db_user.id,
        email=db_user.email,
        role=db_user.role.value,
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserSummary.model_validate(db_user),
    }


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
