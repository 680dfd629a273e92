"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes (student, company, admin)
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pymongo.database import Database

from internstud.core.config import get_settings
from internstud.db.mongodb import get_mongo_db
from internstud.services.mongo_service import UserService

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (auto_error=False so a missing header is a 401, not a 403)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Database = Depends(get_mongo_db)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user document.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise credentials_exception

    user = UserService(db).get_by_id(payload["sub"])
    if not user:
        raise credentials_exception

    user.pop("password_hash", None)
    return user


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require a student account."""
    if user.get("user_type") != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return user


async def get_current_company(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require a company account."""
    if user.get("user_type") != "company":
        raise HTTPException(status_code=403, detail="Companies only")
    return user


async def get_approved_company(company: dict = Depends(get_current_company)) -> dict:
    """Dependency - Require a company whose profile an admin has approved."""
    if company.get("status") != "approved":
        raise HTTPException(status_code=403, detail="Company profile is awaiting admin approval")
    return company


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require the isAdmin flag."""
    if not user.get("is_admin"):
        raise HTTPException(status_code=403, detail="Admins only")
    return user
