"""
Profile Routes

GET /profiles/me - Get own profile
PUT /profiles/student - Create/update student profile
PUT /profiles/company - Create/update company profile (goes back to pending review)
GET /profiles/{user_id} - Public profile view (companies include approved announcements)
"""

from fastapi import APIRouter, HTTPException, Depends
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import get_current_user, get_current_student, get_current_company
from internstud.services.mongo_service import AnnouncementService, UserService, utc_naive
from internstud.schemas.schemas import (
    StudentProfileUpdate, CompanyProfileUpdate, ProfileResponse, AnnouncementResponse, MessageResponse
)

router = APIRouter(prefix="/profiles", tags=["Profiles"])

# Never exposed on a public profile
PRIVATE_FIELDS = {"password_hash", "is_admin"}


def profile_from_doc(user: dict, announcements: list = None) -> ProfileResponse:
    fields = {k: v for k, v in user.items() if k not in PRIVATE_FIELDS and k != "id"}
    return ProfileResponse(
        user_id=user["id"],
        announcements=[AnnouncementResponse(**a) for a in announcements or []],
        **fields
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(user: dict = Depends(get_current_user)):
    """Get current user's profile."""
    return profile_from_doc(user)


@router.put("/student", response_model=MessageResponse)
async def update_student_profile(
    data: StudentProfileUpdate,
    student: dict = Depends(get_current_student),
    db: Database = Depends(get_mongo_db)
):
    """Save the student profile. Dates are stored as naive UTC."""
    fields = data.model_dump(mode="python")
    fields["work_preference"] = data.work_preference.value
    for entry in fields["education"] + fields["experience"]:
        entry["start_date"] = utc_naive(entry["start_date"])
        entry["end_date"] = utc_naive(entry["end_date"])
    fields["profile_completed"] = True

    UserService(db).update_profile(student["id"], fields)
    return MessageResponse(message="Profile updated successfully")


@router.put("/company", response_model=MessageResponse)
async def update_company_profile(
    data: CompanyProfileUpdate,
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """
    Save the company profile.

    Every submission puts the company back to `pending` until an admin
    approves it; pending companies cannot post announcements.
    """
    fields = data.model_dump()
    fields.update(status="pending", profile_completed=True)

    UserService(db).update_profile(company["id"], fields)
    return MessageResponse(message="Profile submitted for admin approval")


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    """View another user's profile. Company profiles list their approved announcements."""
    profile = UserService(db).get_by_id(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    announcements = []
    if profile.get("user_type") == "company":
        announcements = AnnouncementService(db).list_approved(company_id=profile["id"])
    return profile_from_doc(profile, announcements)
