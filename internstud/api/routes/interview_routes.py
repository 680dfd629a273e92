"""
Interview Simulation Routes

GET /get-job-details/{job_id} - Job context for a job-based interview
POST /generate-question - One new question for the session
POST /analyze-answer - Feedback on a single answer
POST /final-feedback - Overall score and recommendations

The handlers are stateless: the client keeps the whole session and sends the
list of questions already asked with every request. AI failures surface as
500 and the client falls back to its static question bank / canned feedback.

Handlers are plain `def` because the AI SDK call blocks; FastAPI runs them
in its threadpool.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.services.ai_client import AIResponseError
from internstud.interview.question_bank import infer_role_from_title
from internstud.services.interview_service import InterviewService, get_interview_service
from internstud.services.mongo_service import AnnouncementService
from internstud.schemas.schemas import (
    JobDetails, Question, AnswerAnalysis, FinalFeedback,
    GenerateQuestionRequest, AnalyzeAnswerRequest, FinalFeedbackRequest
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Interview"])


def load_job_details(db: Database, job_id: str) -> Optional[JobDetails]:
    """Only approved announcements are public."""
    announcement = AnnouncementService(db).get(job_id)
    if not announcement or announcement.get("status") != "approved":
        logger.warning("No approved job found for ID: %s", job_id)
        return None
    return JobDetails(
        id=announcement["id"],
        title=announcement.get("title"),
        company_name=announcement.get("company_name"),
        description=announcement.get("description"),
        requirements=announcement.get("requirements"),
        location=announcement.get("location"),
        job_type=announcement.get("job_type"),
        salary=announcement.get("salary"),
        is_remote=announcement.get("is_remote")
    )


@router.get("/get-job-details/{job_id}", response_model=JobDetails)
def get_job_details(job_id: str, db: Database = Depends(get_mongo_db)):
    """Get the announcement fields used to tailor interview questions."""
    job = load_job_details(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job details not found.")
    return job


@router.post("/generate-question", response_model=Question)
def generate_question(
    request: GenerateQuestionRequest,
    db: Database = Depends(get_mongo_db),
    service: InterviewService = Depends(get_interview_service)
):
    """
    Generate the next interview question.

    Either `role` or `jobId` is required. With only a job, the role is inferred
    from the job title. Questions in `questionsAsked` are excluded.
    """
    if not request.role and not request.job_id:
        raise HTTPException(status_code=400, detail="Either role or jobId must be provided.")
    if not request.interview_type:
        raise HTTPException(status_code=400, detail="Interview type must be provided (technical or hr).")

    job = None
    role = request.role
    if request.job_id:
        job = load_job_details(db, request.job_id)
        if not job:
            raise HTTPException(status_code=404, detail="Job details not found for provided jobId.")
        role = role or infer_role_from_title(job.title)

    try:
        return service.generate_question(role, job, request.interview_type, request.questions_asked)
    except AIResponseError as e:
        logger.error("Error in /generate-question: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/analyze-answer", response_model=AnswerAnalysis)
def analyze_answer(
    request: AnalyzeAnswerRequest,
    service: InterviewService = Depends(get_interview_service)
):
    """Score one answer and list strengths, weaknesses and suggestions."""
    try:
        return service.analyze_answer(request.question, request.answer, request.role)
    except AIResponseError as e:
        logger.error("Error in /analyze-answer: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/final-feedback", response_model=FinalFeedback)
def final_feedback(
    request: FinalFeedbackRequest,
    service: InterviewService = Depends(get_interview_service)
):
    """Summarize the whole interview into an overall score and recommendations."""
    try:
        return service.final_feedback(request.role, request.answers)
    except AIResponseError as e:
        logger.error("Error in /final-feedback: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
