"""
Authentication Routes

POST /auth/register - Register new student or company account
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import hash_password, verify_password, create_access_token, get_current_user
from internstud.services.mongo_service import UserService
from internstud.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse, UserType
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, db: Database = Depends(get_mongo_db)):
    """
    Register a new user account.

    After registration, login to get access token, then complete the profile.
    Company accounts stay `pending` until an admin approves the profile.
    """
    users = UserService(db)
    email = request.email.lower()

    if users.get_by_email(email):
        raise HTTPException(status_code=400, detail="Email already registered")

    data = {
        "email": email,
        "password_hash": hash_password(request.password),
        "user_type": request.user_type.value
    }
    if request.user_type == UserType.student:
        data.update(first_name=request.first_name, last_name=request.last_name, faculty=request.faculty)
    else:
        data.update(company_name=request.company_name, website=request.website)

    user_id = users.create(data)
    logger.info("Registered %s account %s", request.user_type.value, user_id)

    return MessageResponse(message=f"Registered successfully as {request.user_type.value}. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Database = Depends(get_mongo_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = UserService(db).get_by_email(request.email)

    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": user["id"], "user_type": user["user_type"]})

    return TokenResponse(
        access_token=token,
        user_id=user["id"],
        user_type=user["user_type"],
        is_admin=user.get("is_admin", False)
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse(
        user_id=user["id"],
        email=user["email"],
        user_type=user["user_type"],
        is_admin=user.get("is_admin", False),
        status=user.get("status", "not_submitted"),
        profile_completed=user.get("profile_completed", False),
        created_at=user["created_at"]
    )
