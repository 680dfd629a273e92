"""
InternStud - Main Application

FastAPI backend with:
- MongoDB for every collection (users, announcements, applications,
  notifications, companyReviews)
- Generative AI (OpenAI-compatible endpoint) for the interview simulator
- SMTP relay for the contact form
- JWT authentication

Run: uvicorn internstud.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from internstud.api.routes import api_router
from internstud.db.mongodb import get_mongo_db, init_mongo_indexes, test_mongo_connection
from internstud.services.email_service import ContactMailer
from internstud.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="InternStud",
    description="""
    Internship and job matching platform for students and companies.

    ## Features
    - **Authentication**: JWT-based auth for students, companies and admins
    - **Profiles**: Student and company profiles (companies need admin approval)
    - **Announcements**: Job postings, applications and decisions
    - **Notifications**: Application and approval updates
    - **Reviews**: Students review companies they worked for
    - **Interview Simulator**: AI-generated questions, answer analysis and final feedback
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes and check the SMTP relay."""
    if not settings.ai_api_key:
        logger.error("AI_API_KEY is not set; interview endpoints will return 500")

    try:
        init_mongo_indexes(get_mongo_db())
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)

    if settings.email_user:
        if ContactMailer(settings).verify_connection():
            logger.info("SMTP connection verified")
    else:
        logger.warning("EMAIL_USER is not set; contact form delivery is disabled")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
