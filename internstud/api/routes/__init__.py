"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from internstud.api.routes.auth_routes import router as auth_router
from internstud.api.routes.profile_routes import router as profile_router
from internstud.api.routes.announcement_routes import router as announcement_router
from internstud.api.routes.application_routes import router as application_router
from internstud.api.routes.notification_routes import router as notification_router
from internstud.api.routes.admin_routes import router as admin_router
from internstud.api.routes.interview_routes import router as interview_router
from internstud.api.routes.review_routes import router as review_router
from internstud.api.routes.contact_routes import router as contact_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(announcement_router)
api_router.include_router(application_router)
api_router.include_router(notification_router)
api_router.include_router(admin_router)
api_router.include_router(interview_router)
api_router.include_router(review_router)
api_router.include_router(contact_router)
