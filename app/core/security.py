from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES


# Token generation
def create_access_token(
    user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Creates a JWT token with subject (user id), email and role.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# Token decoding
def decode_access_token(token: str) -> dict:
    """
    Decodes JWT token and returns the payload (user_id, email, role).
    Raises JWTError if token is invalid, expired or has no usable subject.
    """
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise JWTError("Token subject is missing or malformed")
    return {
        "user_id": int(subject),
        "email": payload.get("email"),
        "role": payload.get("role"),
    }
