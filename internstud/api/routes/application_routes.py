"""
Application Routes

GET /applications/mine - Student's own applications
GET /applications/received - Applications to the company's announcements
PUT /applications/{application_id}/approve - Approve application (owning company)
PUT /applications/{application_id}/reject - Reject application (owning company)
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import get_current_student, get_current_company
from internstud.services.mongo_service import ApplicationService, NotificationService
from internstud.schemas.schemas import ApplicationResponse, ReviewStatus

router = APIRouter(prefix="/applications", tags=["Applications"])

DECISION_MESSAGES = {
    ReviewStatus.approved: ("approval", "Aplicația ta pentru \"{title}\" a fost acceptată."),
    ReviewStatus.rejected: ("rejection", "Aplicația ta pentru \"{title}\" a fost respinsă."),
}


@router.get("/mine", response_model=List[ApplicationResponse])
async def get_my_applications(
    student: dict = Depends(get_current_student),
    db: Database = Depends(get_mongo_db)
):
    """Get all applications of the current student."""
    return [ApplicationResponse(**r) for r in ApplicationService(db).list_by_student(student["id"])]


@router.get("/received", response_model=List[ApplicationResponse])
async def get_received_applications(
    announcement_id: Optional[str] = Query(None),
    status: Optional[ReviewStatus] = Query(None),
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """Get all applications for the company's announcements."""
    results = ApplicationService(db).list_by_company(
        company["id"],
        announcement_id=announcement_id,
        status=status.value if status else None
    )
    return [ApplicationResponse(**r) for r in results]


def _decide(application_id: str, decision: ReviewStatus, company: dict, db: Database) -> ApplicationResponse:
    applications = ApplicationService(db)
    application = applications.get(application_id)
    if not application or application["company_id"] != company["id"]:
        raise HTTPException(status_code=404, detail="Application not found")

    updated = applications.set_status(application_id, decision.value)

    notification_type, template = DECISION_MESSAGES[decision]
    NotificationService(db).notify(
        user_id=application["student_id"],
        type=notification_type,
        message=template.format(title=application["announcement_title"]),
        data={"job_id": application["announcement_id"], "application_id": application_id}
    )
    return ApplicationResponse(**updated)


@router.put("/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: str,
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """Approve an application and notify the student."""
    return _decide(application_id, ReviewStatus.approved, company, db)


@router.put("/{application_id}/reject", response_model=ApplicationResponse)
async def reject_application(
    application_id: str,
    company: dict = Depends(get_current_company),
    db: Database = Depends(get_mongo_db)
):
    """Reject an application and notify the student."""
    return _decide(application_id, ReviewStatus.rejected, company, db)
