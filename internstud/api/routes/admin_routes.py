"""
Admin Routes (isAdmin accounts only)

GET /admin/companies/pending - Companies waiting for approval
PUT /admin/companies/{company_id}/approve - Approve company profile
PUT /admin/companies/{company_id}/reject - Reject company profile
GET /admin/announcements/pending - Announcements waiting for approval
PUT /admin/announcements/{announcement_id}/approve - Publish announcement
PUT /admin/announcements/{announcement_id}/reject - Reject announcement
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import require_admin
from internstud.services.mongo_service import AnnouncementService, NotificationService, UserService
from internstud.schemas.schemas import AnnouncementResponse, ProfileResponse, ReviewStatus
from internstud.api.routes.profile_routes import profile_from_doc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/companies/pending", response_model=List[ProfileResponse])
async def list_pending_companies(db: Database = Depends(get_mongo_db)):
    """Companies that submitted a profile and wait for review."""
    return [profile_from_doc(c) for c in UserService(db).list_companies(status="pending")]


def _set_company_status(company_id: str, decision: ReviewStatus, db: Database) -> ProfileResponse:
    company = UserService(db).set_company_status(company_id, decision.value)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    logger.info("Company %s %s", company_id, decision.value)
    return profile_from_doc(company)


@router.put("/companies/{company_id}/approve", response_model=ProfileResponse)
async def approve_company(company_id: str, db: Database = Depends(get_mongo_db)):
    return _set_company_status(company_id, ReviewStatus.approved, db)


@router.put("/companies/{company_id}/reject", response_model=ProfileResponse)
async def reject_company(company_id: str, db: Database = Depends(get_mongo_db)):
    return _set_company_status(company_id, ReviewStatus.rejected, db)


@router.get("/announcements/pending", response_model=List[AnnouncementResponse])
async def list_pending_announcements(db: Database = Depends(get_mongo_db)):
    return [AnnouncementResponse(**a) for a in AnnouncementService(db).list_pending()]


def _set_announcement_status(announcement_id: str, decision: ReviewStatus, db: Database) -> AnnouncementResponse:
    announcement = AnnouncementService(db).set_status(announcement_id, decision.value)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")

    verdict = "aprobat" if decision == ReviewStatus.approved else "respins"
    NotificationService(db).notify(
        user_id=announcement["company_id"],
        type="approval" if decision == ReviewStatus.approved else "rejection",
        message=f"Anunțul \"{announcement['title']}\" a fost {verdict}.",
        data={"job_id": announcement["id"]}
    )
    return AnnouncementResponse(**announcement)


@router.put("/announcements/{announcement_id}/approve", response_model=AnnouncementResponse)
async def approve_announcement(announcement_id: str, db: Database = Depends(get_mongo_db)):
    return _set_announcement_status(announcement_id, ReviewStatus.approved, db)


@router.put("/announcements/{announcement_id}/reject", response_model=AnnouncementResponse)
async def reject_announcement(announcement_id: str, db: Database = Depends(get_mongo_db)):
    return _set_announcement_status(announcement_id, ReviewStatus.rejected, db)
