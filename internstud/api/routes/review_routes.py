"""
Company Review Routes

GET /eligible-companies?userId= - Past employers the student may review
POST /submit-review - Store a review (rating 1-5 and comment)
GET /company-reviews/{company_id} - Reviews of one company

Identity comes from the client-supplied userId, as in the web client.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.services.mongo_service import CompanyReviewService, UserService
from internstud.schemas.schemas import EligibleCompany, SubmitReviewRequest, ReviewResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reviews"])

MIN_RATING = 1
MAX_RATING = 5


@router.get("/eligible-companies", response_model=List[EligibleCompany])
async def eligible_companies(user_id: Optional[str] = Query(None, alias="userId"), db: Database = Depends(get_mongo_db)):
    """Companies from the student's finished experience entries, unique by company."""
    if not user_id:
        raise HTTPException(status_code=401, detail="User not authenticated.")

    student = UserService(db).get_by_id(user_id)
    if not student:
        logger.warning("User data not found for userId: %s", user_id)
        raise HTTPException(status_code=404, detail="User data not found.")

    return [EligibleCompany(**c) for c in CompanyReviewService(db).eligible_companies(student)]


@router.post("/submit-review", response_model=MessageResponse, status_code=201)
async def submit_review(request: SubmitReviewRequest, db: Database = Depends(get_mongo_db)):
    """Submit a review. The student's name is stored with it ("Anonim" if unknown)."""
    if not request.user_id:
        raise HTTPException(status_code=401, detail="User not authenticated.")

    if not request.company_id or request.rating is None or not (request.comment or "").strip():
        raise HTTPException(status_code=400, detail="Company ID, rating, and comment are required.")

    if request.rating < MIN_RATING or request.rating > MAX_RATING:
        raise HTTPException(status_code=400, detail="Rating must be between 1 and 5.")

    CompanyReviewService(db).submit(
        student_id=request.user_id,
        company_id=request.company_id,
        rating=request.rating,
        comment=request.comment.strip()
    )
    return MessageResponse(message="Review submitted successfully!")


@router.get("/company-reviews/{company_id}", response_model=List[ReviewResponse])
async def company_reviews(company_id: str, db: Database = Depends(get_mongo_db)):
    return [ReviewResponse(**r) for r in CompanyReviewService(db).list_for_company(company_id)]
