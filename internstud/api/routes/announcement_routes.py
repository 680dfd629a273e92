"""
Announcement Routes

POST /announcements - Create announcement (approved company only, starts pending)
GET /announcements - List approved announcements with filters
GET /announcements/mine - Company's own announcements, any status
GET /announcements/{announcement_id} - Get announcement details
PUT /announcements/{announcement_id} - Update announcement (owner only)
DELETE /announcements/{announcement_id} - Delete announcement (owner only)
POST /announcements/{announcement_id}/apply - Apply to announcement (student only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import get_current_user, get_current_student, get_current_company, get_approved_company
from internstud.services.mongo_service import (
    AnnouncementService, ApplicationService, NotificationService, full_name, utc_naive
)
from internstud.schemas.schemas import (
    AnnouncementCreate, AnnouncementUpdate, AnnouncementResponse,
    ApplicationCreate, ApplicationResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.post("", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(
    data: AnnouncementCreate,
    company: dict = Depends(get_approved_company),
    db: Database = Depends(get_mongo_db)
):
    """Create a new announcement. It is visible to students once an admin approves it."""
    fields = data.model_dump()
    fields["job_type"] = data.job_type.value
    fields["application_deadline"] = utc_naive(data.application_deadline)

    announcement = AnnouncementService(db).create(company, fields)
    logger.info("Company %s created announcement %s", company["id"], announcement["id"])
    return AnnouncementResponse(**announcement)


@router.get("", response_model=List[AnnouncementResponse])
async def list_announcements(
    company_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Search in title"),
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    """List approved announcements, newest first."""
    results = AnnouncementService(db).list_approved(company_id=company_id, search=search)
    return [AnnouncementResponse(**r) for r in results]


@router.get("/mine", response_model=List[AnnouncementResponse])
async def list_my_announcements(
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """All announcements of the current company, including pending and rejected ones."""
    return [AnnouncementResponse(**r) for r in AnnouncementService(db).list_by_company(company["id"])]


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(
    announcement_id: str,
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    """Get details of an announcement. Unapproved ones are visible to their owner only."""
    announcement = AnnouncementService(db).get(announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    if announcement["status"] != "approved" and announcement["company_id"] != user["id"] and not user.get("is_admin"):
        raise HTTPException(status_code=404, detail="Announcement not found")
    return AnnouncementResponse(**announcement)


@router.put("/{announcement_id}", response_model=MessageResponse)
async def update_announcement(
    announcement_id: str,
    update: AnnouncementUpdate,
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """Update an announcement. Only the owning company can update."""
    fields = update.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    if update.job_type:
        fields["job_type"] = update.job_type.value
    if update.application_deadline:
        fields["application_deadline"] = utc_naive(update.application_deadline)

    if not AnnouncementService(db).update(announcement_id, company["id"], fields):
        raise HTTPException(status_code=404, detail="Announcement not found or access denied")

    return MessageResponse(message="Announcement updated successfully")


@router.delete("/{announcement_id}", response_model=MessageResponse)
async def delete_announcement(
    announcement_id: str,
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """Delete an announcement. Cascades to applications."""
    if not AnnouncementService(db).delete(announcement_id, company["id"]):
        raise HTTPException(status_code=404, detail="Announcement not found or access denied")

    return MessageResponse(message="Announcement deleted successfully")


@router.post("/{announcement_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_announcement(
    announcement_id: str,
    application: ApplicationCreate,
    student: dict = Depends(get_current_student),
    db: Database = Depends(get_mongo_db)
):
    """Apply to an announcement. Students only. Cannot apply twice to the same announcement."""
    announcement = AnnouncementService(db).get(announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    if announcement["status"] != "approved":
        raise HTTPException(status_code=400, detail="Announcement is not accepting applications")

    applications = ApplicationService(db)
    if applications.exists(announcement["id"], student["id"]):
        raise HTTPException(status_code=400, detail="Already applied to this announcement")

    try:
        created = applications.create(announcement, student, application.message)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Already applied to this announcement")

    NotificationService(db).notify(
        user_id=announcement["company_id"],
        type="application",
        message=f"{full_name(student, default='Un student')} a aplicat la anunțul \"{announcement['title']}\".",
        data={"job_id": announcement["id"], "application_id": created["id"]}
    )

    return ApplicationResponse(**created)
