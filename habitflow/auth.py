from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import os

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from habitflow.constants import (
    DEFAULT_JWT_SECRET, DEFAULT_JWT_EXPIRE_DAYS, JWT_ALGORITHM, ROLE_ADMIN
)
from habitflow.database import get_db
from habitflow.models import User
from habitflow.repositories.user_repository import UserRepository

# In production set the secret through the environment
SECRET_KEY = os.getenv("HABITFLOW_JWT_SECRET", DEFAULT_JWT_SECRET)
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("HABITFLOW_JWT_EXPIRE_DAYS", DEFAULT_JWT_EXPIRE_DAYS))

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

logger = logging.getLogger("habitflow.auth")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed JWT carrying the user's id and role"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {"sub": str(user.id), "role": user.role, "exp": expire}
    return jwt.encode(payload, SECRET_KEY, algorithm=JWT_ALGORITHM)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to a user, or fail with 401"""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[JWT_ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Role is read from the database so demotions take effect immediately
    user = UserRepository.get_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, user no longer exists",
        )
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only admins through"""
    if user.role != ROLE_ADMIN:
        logger.warning(f"User {user.id} denied access to admin endpoint")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{user.role}' is not authorized to access this route"
        )
    return user
